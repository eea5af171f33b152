"""
CryptoSignals 后端

加密货币看板的行情代理与 mock 数据服务
"""
