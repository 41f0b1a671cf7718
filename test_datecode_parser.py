import datetime
import unittest

from datecode_common import DateCodeFormatError, MissingInputError
from datecode_generator import generate_early_1980_code, generate_late_1980_code, generate_1990_code, \
  generate_2007_code, generate_2007_code_for_date
from datecode_parser import parse_early_1980_code, parse_late_1980_code, parse_1990_code, parse_2007_code, \
  Early1980DateCode
from factory_locations import Country, FactoryLocationRegistry, kDefaultRegistry


kAllParsers = [parse_early_1980_code, parse_late_1980_code, parse_1990_code, parse_2007_code]


class DateCodeParserTestCase(unittest.TestCase):
  def test_missing(self):
    for parser in kAllParsers:
      with self.assertRaises(MissingInputError):
        parser("")
      with self.assertRaises(MissingInputError):
        parser(None)

  def test_factory_code_with_digit(self):
    with self.assertRaises(DateCodeFormatError):
      parse_late_1980_code("856A1")
    with self.assertRaises(DateCodeFormatError):
      parse_1990_code("A10965")
    with self.assertRaises(DateCodeFormatError):
      parse_2007_code("A10017")


class Early1980ParserTestCase(unittest.TestCase):
  def test_parse(self):
    self.assertEqual(parse_early_1980_code("856"), Early1980DateCode(year=1985, month=6))
    self.assertEqual(parse_early_1980_code("8512"), Early1980DateCode(year=1985, month=12))

  def test_roundtrip(self):
    for year in range(1980, 1990):
      for month in range(1, 13):
        parsed = parse_early_1980_code(generate_early_1980_code(year, month))
        self.assertEqual((parsed.year, parsed.month), (year, month))

  def test_invalid(self):
    for code in ["8", "85", "8513", "850", "906", "796", "8A6", "85 6", "85+6", "８５６"]:
      with self.assertRaises(DateCodeFormatError, msg=code):
        parse_early_1980_code(code)


class Late1980ParserTestCase(unittest.TestCase):
  def test_parse(self):
    parsed = parse_late_1980_code("856SD")
    self.assertEqual(parsed.year, 1985)
    self.assertEqual(parsed.month, 6)
    self.assertEqual(parsed.factory_location_code, "SD")
    self.assertEqual(parsed.countries, (Country.France, Country.USA))

    parsed = parse_late_1980_code("8711vi")
    self.assertEqual(parsed.month, 11)
    self.assertEqual(parsed.factory_location_code, "VI")
    self.assertEqual(parsed.countries, (Country.France,))

  def test_roundtrip(self):
    for factory_code in ["SD", "FL", "LP", "CA", "DI", "BO"]:
      for year in [1980, 1984, 1989]:
        for month in range(1, 13):
          parsed = parse_late_1980_code(generate_late_1980_code(factory_code, year, month))
          self.assertEqual((parsed.factory_location_code, parsed.year, parsed.month), (factory_code, year, month))
          self.assertEqual(parsed.countries, kDefaultRegistry.lookup(factory_code))
          self.assertTrue(parsed.countries)

  def test_invalid(self):
    for code in ["85SD", "8SD", "856ZZ", "8513SD", "850SD", "906SD", "85XSD"]:
      with self.assertRaises(DateCodeFormatError, msg=code):
        parse_late_1980_code(code)


class Period1990ParserTestCase(unittest.TestCase):
  def test_parse(self):
    parsed = parse_1990_code("FR0965")
    self.assertEqual(parsed.factory_location_code, "FR")
    self.assertEqual(parsed.year, 1995)
    self.assertEqual(parsed.month, 6)
    self.assertEqual(parsed.countries, (Country.France,))

  def test_century(self):
    parsed = parse_1990_code(generate_1990_code("fr", 2003, 11))
    self.assertEqual((parsed.year, parsed.month), (2003, 11))
    parsed = parse_1990_code("FR1013")
    self.assertEqual((parsed.year, parsed.month), (2003, 11))

  def test_lowercase(self):
    parsed = parse_1990_code("fr0965")
    self.assertEqual(parsed.factory_location_code, "FR")

  def test_roundtrip(self):
    for factory_code in ["FR", "SD", "LW", "TX", "MI"]:
      for year in range(1990, 2007):
        for month in [1, 6, 9, 10, 12]:
          parsed = parse_1990_code(generate_1990_code(factory_code, year, month))
          self.assertEqual((parsed.factory_location_code, parsed.year, parsed.month), (factory_code, year, month))
          self.assertTrue(parsed.countries)

  def test_invalid(self):
    for code in [
      "FR0017",  # 2007
      "FR0878",  # 1988
      "FR1935",  # month 13
      "FR0905",  # month 0
      "ZZ0965",  # unknown factory
      "FR09650", "FR096", "F0965", "FRX965", "FR 0965", "FR0965\n",
    ]:
      with self.assertRaises(DateCodeFormatError, msg=code):
        parse_1990_code(code)

  def test_registry(self):
    registry = FactoryLocationRegistry(locations={'ZZ': ['Italy']})
    parsed = parse_1990_code("ZZ0965", registry=registry)
    self.assertEqual(parsed.countries, (Country.Italy,))
    with self.assertRaises(DateCodeFormatError):
      parse_1990_code("FR0965", registry=registry)


class Post2007ParserTestCase(unittest.TestCase):
  def test_parse(self):
    parsed = parse_2007_code("FL2149")
    self.assertEqual(parsed.factory_location_code, "FL")
    self.assertEqual(parsed.year, 2019)
    self.assertEqual(parsed.week, 24)
    self.assertEqual(parsed.countries, (Country.France, Country.USA))

  def test_roundtrip(self):
    for year in [2007, 2008, 2009, 2015, 2020, 2024]:
      for week in [1, 10, 26, 52]:
        parsed = parse_2007_code(generate_2007_code("sd", year, week))
        self.assertEqual((parsed.factory_location_code, parsed.year, parsed.week), ("SD", year, week))

  def test_week_53(self):
    self.assertEqual(parse_2007_code("FL5039").week, 53)  # 2009 has 53 weeks
    with self.assertRaises(DateCodeFormatError):
      parse_2007_code("FL5037")  # 2007 doesn't

  def test_year_boundary(self):
    parsed = parse_2007_code(generate_2007_code_for_date("FL", datetime.date(2011, 1, 1)))
    self.assertEqual((parsed.year, parsed.week), (2010, 52))
    parsed = parse_2007_code(generate_2007_code_for_date("FL", datetime.date(2010, 1, 1)))
    self.assertEqual((parsed.year, parsed.week), (2009, 53))
    for manufacturing_date, year in [(datetime.date(2015, 1, 2), 2014), (datetime.date(2015, 1, 3), 2014),
                                     (datetime.date(2014, 1, 3), 2013)]:
      parsed = parse_2007_code(generate_2007_code_for_date("FL", manufacturing_date))
      self.assertEqual((parsed.year, parsed.week), (year, 52), msg=manufacturing_date)

  def test_late_december_mismatch(self):
    # the date-based week numbering allows a 53rd week the full-week rule doesn't
    with self.assertRaises(DateCodeFormatError):
      parse_2007_code(generate_2007_code_for_date("FL", datetime.date(2007, 12, 31)))

  def test_invalid(self):
    for code in [
      "FR0016",  # 2006
      "FR0007",  # week 0
      "FR5037",  # week 53 in 2007
      "FR6019",  # week 61
      "ZZ0017",  # unknown factory
      "FR00170", "FR00", "1R0017",
    ]:
      with self.assertRaises(DateCodeFormatError, msg=code):
        parse_2007_code(code)
