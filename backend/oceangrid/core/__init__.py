"""
核心模块：配置、存储与模拟实例管理。
"""
