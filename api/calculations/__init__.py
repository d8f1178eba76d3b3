"""
Price/time calculations (Kalkulationen) and their service lines.
"""
