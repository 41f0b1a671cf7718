# Parses date codes for each era into their manufacturing date fields and factory location.
# Any malformed, out of range, or unknown-factory code raises DateCodeFormatError.
import logging
import re
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from datecode_common import DateCodeFormatError, DateCodeEra, EraEarly1980, EraLate1980, Era1990, Era2007, \
  kFactoryCodePattern, kMonthsPerYear, require_text, upper_invariant, parse_decimal, deinterleave, full_weeks_in_year
from factory_locations import Country, FactoryLocationRegistry, kDefaultRegistry


log = logging.getLogger(__name__)

kFactoryDateCodePattern = re.compile(r'\D{2}[0-9]{4}')  # 1990 onwards: factory code and interleaved block


class Early1980DateCode(BaseModel):
  model_config = ConfigDict(frozen=True)

  year: int
  month: int


class FactoryDateCode(BaseModel):
  """Base class for date codes carrying a factory location"""
  model_config = ConfigDict(frozen=True)

  countries: Tuple[Country, ...]
  factory_location_code: str
  year: int


class Late1980DateCode(FactoryDateCode):
  month: int


class Period1990DateCode(FactoryDateCode):
  month: int


class Post2007DateCode(FactoryDateCode):
  week: int


def _parse_year_month(code: str, era: DateCodeEra, year_text: str, month_text: str) -> Tuple[int, int]:
  """Parses a 2-digit 1900s year and a variable width month, checking both against the era"""
  year = parse_decimal(year_text)
  month = parse_decimal(month_text)
  if year is None or month is None:
    raise DateCodeFormatError(f"date code {code!r} has non-numeric year or month")
  year += 1900
  if not era.contains_year(year) or month < 1 or month > kMonthsPerYear:
    raise DateCodeFormatError(f"date code {code!r} has year {year} or month {month} outside {era}")
  return year, month


def _resolve_factory(code: str, factory_code: str,
                     registry: FactoryLocationRegistry) -> Tuple[str, Tuple[Country, ...]]:
  if not kFactoryCodePattern.fullmatch(factory_code):
    raise DateCodeFormatError(f"date code {code!r} has malformed factory code {factory_code!r}")
  factory_code = upper_invariant(factory_code)
  countries = registry.lookup(factory_code)
  if not countries:
    raise DateCodeFormatError(f"date code {code!r} has unknown factory code {factory_code!r}")
  return factory_code, countries


def _check_factory_date_code(code: Optional[str]) -> str:
  require_text(code, 'date code')
  if not kFactoryDateCodePattern.fullmatch(code):
    raise DateCodeFormatError(f"date code {code!r} must be two non-digit characters followed by four digits")
  return code


def parse_early_1980_code(code: str) -> Early1980DateCode:
  """Parses an early 1980s code: two year digits, then the month in the remaining one or two characters"""
  require_text(code, 'date code')
  year, month = _parse_year_month(code, EraEarly1980, code[:2], code[2:])
  log.debug("parsed early 1980s date code %s: %d/%d", code, year, month)
  return Early1980DateCode(year=year, month=month)


def parse_late_1980_code(code: str, registry: Optional[FactoryLocationRegistry] = None) -> Late1980DateCode:
  """Parses a late 1980s code: two year digits and two factory code characters at the ends, with the month
  taking everything in between"""
  if registry is None:
    registry = kDefaultRegistry
  require_text(code, 'date code')
  if len(code) < 5:  # month needs at least one character
    raise DateCodeFormatError(f"date code {code!r} is too short")
  factory_code, countries = _resolve_factory(code, code[-2:], registry)
  year, month = _parse_year_month(code, EraLate1980, code[:2], code[2:-2])
  log.debug("parsed late 1980s date code %s: %d/%d in %s", code, year, month, factory_code)
  return Late1980DateCode(countries=countries, factory_location_code=factory_code, year=year, month=month)


def parse_1990_code(code: str, registry: Optional[FactoryLocationRegistry] = None) -> Period1990DateCode:
  """Parses a 1990 to 2006 code, eg FR0965. A year tens digit of 0 is in the 2000s, otherwise in the 1900s."""
  if registry is None:
    registry = kDefaultRegistry
  _check_factory_date_code(code)
  factory_code, countries = _resolve_factory(code, code[:2], registry)
  month_digits, year_digits = deinterleave(code[2:])
  century = 2000 if year_digits[0] == '0' else 1900
  year = century + int(year_digits)
  month = int(month_digits)
  if not Era1990.contains_year(year) or month < 1 or month > kMonthsPerYear:
    raise DateCodeFormatError(f"date code {code!r} has year {year} or month {month} outside {Era1990}")
  log.debug("parsed 1990 date code %s: %d/%d in %s", code, year, month, factory_code)
  return Period1990DateCode(countries=countries, factory_location_code=factory_code, year=year, month=month)


def parse_2007_code(code: str, registry: Optional[FactoryLocationRegistry] = None) -> Post2007DateCode:
  """Parses a 2007 onwards code, with weeks bounded by the number of full weeks, starting Thursday, in the year"""
  if registry is None:
    registry = kDefaultRegistry
  _check_factory_date_code(code)
  factory_code, countries = _resolve_factory(code, code[:2], registry)
  week_digits, year_digits = deinterleave(code[2:])
  year = 2000 + int(year_digits)
  week = int(week_digits)
  if not Era2007.contains_year(year):
    raise DateCodeFormatError(f"date code {code!r} has year {year} outside {Era2007}")
  max_week = full_weeks_in_year(year)
  if week < 1 or week > max_week:
    raise DateCodeFormatError(f"date code {code!r} has week {week}, {year} has {max_week} weeks")
  log.debug("parsed 2007 date code %s: week %d of %d in %s", code, week, year, factory_code)
  return Post2007DateCode(countries=countries, factory_location_code=factory_code, year=year, week=week)
