"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_REQUIRED_PERCENTAGE = 75
DATE_KEY_FORMAT = "%Y-%m-%d"

# Day attendance bands (calendar tiles)
GOOD_ATTENDANCE_RATE = 0.75

SUNDAY_HOLIDAY_NAME = "Sunday"
SATURDAY_HOLIDAY_NAME = "2nd/4th Saturday"
GENERIC_HOLIDAY_NAME = "Holiday"
