"""
Deal filters shared by the entry insights.

Each predicate is SQL evaluated inside the Parquet scan. Deal types follow
the trading terminal's numbering: type 2 is a balance operation, entry 0 is
"in" and entry 1 is "out".
"""

BALANCE_TYPE = 2
ENTRY_IN = 0
ENTRY_OUT = 1

# type == 2 AND entry == 0
BALANCE_ENTRIES = f'"type" = {BALANCE_TYPE} AND "entry" = {ENTRY_IN}'

# entry == 1
TRADE_ENTRIES = f'"entry" = {ENTRY_OUT}'

# entry == 1 OR type == 2
TRADE_ENTRIES_WITH_BALANCE = f'"entry" = {ENTRY_OUT} OR "type" = {BALANCE_TYPE}'
