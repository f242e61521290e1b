"""持久化、视图解析与输出服务"""
