"""HTTP 接口、调用方客户端与函数式服务入口。"""
