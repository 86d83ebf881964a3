CONSUMPTION_WINDOW_DAYS = 30
WEEKS_IN_WINDOW = CONSUMPTION_WINDOW_DAYS / 7

REORDER_THRESHOLD_DAYS = 14
REORDER_SUPPLY_DAYS = 30

WEEKLY_TREND_WEEKS = 26
WEEKLY_TREND_MONTHS = 6
MOVING_AVERAGE_WEEKS = 4

STATUS_FILTERS = ("all", "low", "out")
SORT_OPTIONS = ("name-asc", "stock-desc", "stock-asc", "depletion-asc")
