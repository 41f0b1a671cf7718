# Generates date codes for each era, from either a manufacturing year and month (or week), or a calendar date.
# Factory codes are validated before any date field, and are always emitted upper-cased.
import datetime

from datecode_common import EraEarly1980, EraLate1980, Era1990, Era2007, check_factory_location_code, check_year, \
  check_month, check_week, check_date, format_year_suffix, interleave, four_day_week_of_year, in_previous_year_week, \
  full_weeks_in_year


def generate_early_1980_code(year: int, month: int) -> str:
  """Early 1980s: two year digits followed by the month, unpadded. e.g. June 1985 is 856"""
  check_year(EraEarly1980, year)
  check_month(month)
  return format_year_suffix(year) + str(month)


def generate_early_1980_code_for_date(manufacturing_date: datetime.date) -> str:
  manufacturing_date = check_date(EraEarly1980, manufacturing_date)
  return format_year_suffix(manufacturing_date.year) + str(manufacturing_date.month)


def generate_late_1980_code(factory_code: str, year: int, month: int) -> str:
  """Late 1980s: two year digits, the unpadded month, then the factory code. e.g. June 1985 in SD is 856SD"""
  factory_code = check_factory_location_code(factory_code)
  check_year(EraLate1980, year)
  check_month(month)
  return format_year_suffix(year) + str(month) + factory_code


def generate_late_1980_code_for_date(factory_code: str, manufacturing_date: datetime.date) -> str:
  factory_code = check_factory_location_code(factory_code)
  manufacturing_date = check_date(EraLate1980, manufacturing_date)
  return format_year_suffix(manufacturing_date.year) + str(manufacturing_date.month) + factory_code


def generate_1990_code(factory_code: str, year: int, month: int) -> str:
  """1990 to 2006: factory code followed by the month digits interleaved with the last two year digits.
  e.g. June 1995 in FR is FR0965"""
  factory_code = check_factory_location_code(factory_code)
  check_year(Era1990, year)
  check_month(month)
  return factory_code + interleave(month, year)


def generate_1990_code_for_date(factory_code: str, manufacturing_date: datetime.date) -> str:
  factory_code = check_factory_location_code(factory_code)
  manufacturing_date = check_date(Era1990, manufacturing_date)
  return factory_code + interleave(manufacturing_date.month, manufacturing_date.year)


def generate_2007_code(factory_code: str, year: int, week: int) -> str:
  """2007 onwards: factory code followed by the week digits interleaved with the last two year digits.
  Weeks are bounded by the number of full weeks, starting Thursday, in the year."""
  factory_code = check_factory_location_code(factory_code)
  check_year(Era2007, year)
  check_week(year, week)
  return factory_code + interleave(week, year)


def generate_2007_code_for_date(factory_code: str, manufacturing_date: datetime.date) -> str:
  """2007 onwards, numbering weeks from the first week with four days in the year, starting Monday.
  January 1st to 3rd falling on Friday to Sunday are coded with the previous year and its last week."""
  factory_code = check_factory_location_code(factory_code)
  manufacturing_date = check_date(Era2007, manufacturing_date)
  week = four_day_week_of_year(manufacturing_date)
  year = manufacturing_date.year
  if in_previous_year_week(manufacturing_date):
    year -= 1
    week = full_weeks_in_year(year)  # the last week a parser accepts for that year
  return factory_code + interleave(week, year)
