# Shared definitions for manufacturing date codes: eras, errors, and culture-invariant digit handling
# Used by both datecode_generator and datecode_parser.
import datetime
import re
from typing import Optional, Tuple, Union


class DateCodeError(ValueError):
  """Base class for all date code errors"""


class MissingInputError(DateCodeError):
  """A required string argument (factory code, date code) is empty or absent"""


class DateCodeRangeError(DateCodeError):
  """A year, month or week is outside the valid window of its era"""


class DateCodeFormatError(DateCodeError):
  """A date code or factory code is malformed or doesn't resolve to a known factory"""


class DateCodeEra:
  """Definition of a date code era and its valid manufacturing years.
  max_year of None means the era is still current."""
  def __init__(self, name: str, min_year: int, max_year: Optional[int] = None):
    self.name = name
    self.min_year = min_year
    self.max_year = max_year

  def contains_year(self, year: int) -> bool:
    return year >= self.min_year and (self.max_year is None or year <= self.max_year)

  def contains_date(self, value: datetime.date) -> bool:
    if value < datetime.date(self.min_year, 1, 1):
      return False
    return self.max_year is None or value <= datetime.date(self.max_year, 12, 31)

  def __repr__(self):
    if self.max_year is None:
      return f"{self.name} ({self.min_year}+)"
    return f"{self.name} ({self.min_year}-{self.max_year})"


EraEarly1980 = DateCodeEra('Early 1980s', 1980, 1989)
EraLate1980 = DateCodeEra('Late 1980s', 1980, 1989)
Era1990 = DateCodeEra('1990 to 2006', 1990, 2006)
Era2007 = DateCodeEra('2007 onwards', 2007, datetime.MAXYEAR)

kAllEras = [
  EraEarly1980,
  EraLate1980,
  Era1990,
  Era2007,
]

kFactoryCodePattern = re.compile(r'\D{2}')  # any two non-digits, not only letters
kDigitsPattern = re.compile(r'[0-9]+')  # ASCII only, str.isdigit also takes other scripts
kMonthsPerYear = 12


def require_text(value: Optional[str], name: str) -> str:
  if not value:
    raise MissingInputError(f"{name} is missing")
  return value


def upper_invariant(text: str) -> str:
  """Upper-cases each character on its own, leaving characters like 'ß' whose upper case is longer as is"""
  return ''.join(char.upper() if len(char.upper()) == 1 else char for char in text)


def check_factory_location_code(factory_code: Optional[str]) -> str:
  """Validates a two character factory location code, returning it upper-cased"""
  require_text(factory_code, 'factory location code')
  if not kFactoryCodePattern.fullmatch(factory_code):
    raise DateCodeFormatError(f"factory location code {factory_code!r} must be two non-digit characters")
  return upper_invariant(factory_code)


def check_year(era: DateCodeEra, year: int) -> int:
  if not era.contains_year(year):
    raise DateCodeRangeError(f"year {year} is outside {era}")
  return year


def check_month(month: int) -> int:
  if month < 1 or month > kMonthsPerYear:
    raise DateCodeRangeError(f"month {month} must be between 1 and {kMonthsPerYear}")
  return month


def check_week(year: int, week: int) -> int:
  max_week = full_weeks_in_year(year)
  if week < 1 or week > max_week:
    raise DateCodeRangeError(f"week {week} must be between 1 and {max_week} for {year}")
  return week


def check_date(era: DateCodeEra, value: Union[datetime.date, datetime.datetime]) -> datetime.date:
  """Validates a manufacturing date against the era window, returning it as a plain date"""
  if isinstance(value, datetime.datetime):  # time of day is irrelevant, and datetime doesn't compare to date
    value = value.date()
  if not era.contains_date(value):
    raise DateCodeRangeError(f"date {value.isoformat()} is outside {era}")
  return value


def format_year_suffix(year: int) -> str:
  """Last two digits of a four digit year"""
  return f"{year:04d}"[2:]


def interleave(count: int, year: int) -> str:
  """Builds the 4-character block of count (month or week) tens, year tens, count units, year units"""
  count_digits = f"{count:02d}"
  year_digits = format_year_suffix(year)
  return count_digits[0] + year_digits[0] + count_digits[1] + year_digits[1]


def deinterleave(block: str) -> Tuple[str, str]:
  """Splits an interleaved block into its (count, year suffix) digit pairs"""
  return block[0] + block[2], block[1] + block[3]


def parse_decimal(text: str) -> Optional[int]:
  """Parses an unsigned ASCII decimal, returning None if the text isn't one"""
  if not kDigitsPattern.fullmatch(text):
    return None
  return int(text)


def full_weeks_in_year(year: int) -> int:
  """Week number of December 31st where week 1 is the first full week in the year and weeks start on Thursday.
  Days before the first Thursday belong to the previous year, so this is also the count of weeks in the year."""
  jan1 = datetime.date(year, 1, 1)
  first_week_start = jan1 + datetime.timedelta(days=(3 - jan1.weekday()) % 7)  # weekday() of Thursday is 3
  return (datetime.date(year, 12, 31) - first_week_start).days // 7 + 1


def four_day_week_of_year(value: datetime.date) -> int:
  """Week number where week 1 is the first week with at least four days in the year and weeks start on Monday.
  Days before week 1 get the last week number of the previous year. Unlike ISO 8601, days at the end of December
  are never counted as week 1 of the next year."""
  jan1 = datetime.date(value.year, 1, 1)
  offset = (7 - jan1.weekday()) % 7  # days from January 1st to the first Monday
  if offset >= 4:  # the week containing January 1st has at least four days, so it is week 1
    offset -= 7
  day = (value - jan1).days - offset
  if day < 0:
    return four_day_week_of_year(datetime.date(value.year - 1, 12, 31))
  return day // 7 + 1


def in_previous_year_week(value: datetime.date) -> bool:
  """Whether a date is coded in the last week of the previous year:
  January 1st to 3rd that land on a Friday, Saturday or Sunday, whatever weekday the year starts on"""
  return value.month == 1 and value.day <= 3 and value.weekday() >= 4
