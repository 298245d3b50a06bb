"""
Data loading module.

Reads the backtest input files (membership events, a constituent snapshot,
closing prices and a benchmark series) into validated models and pandas
tables.
"""
