"""TaskCoin Core -- 账本存储、任务生命周期与查询聚合"""
