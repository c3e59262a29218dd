"""Token disbursement schedules with cliff and clawback"""
__version__ = "0.1.0"
