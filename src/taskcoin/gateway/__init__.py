"""TaskCoin Gateway -- HTTP 接入层"""
