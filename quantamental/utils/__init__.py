"""
Utility functions module.

Date handling shared by the site checker (front matter dates) and the
backtest (analysis windows over the trading calendar).
"""
