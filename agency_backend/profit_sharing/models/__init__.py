from .monthly_profit import MonthlyProfit, ProfitShare
from .manual_distribution import ManualDistributionPartner, ManualProfitDistribution

__all__ = [
    "ManualDistributionPartner",
    "ManualProfitDistribution",
    "MonthlyProfit",
    "ProfitShare",
]
