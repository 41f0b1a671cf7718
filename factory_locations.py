# Factory location registry, mapping two-character factory codes found in date codes to countries of manufacture.
# Some codes have been used by factories in more than one country, so a lookup returns an ordered sequence.
import logging
from enum import Enum
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator

from datecode_common import kFactoryCodePattern, upper_invariant


log = logging.getLogger(__name__)


class Country(str, Enum):
  France = 'France'
  Germany = 'Germany'
  Italy = 'Italy'
  Spain = 'Spain'
  Switzerland = 'Switzerland'
  USA = 'USA'


# Known factory codes. Codes containing digits are omitted since they can't appear in a valid date code.
kFactoryLocations: Dict[str, List[Country]] = {
  'AA': [Country.France],
  'AH': [Country.France],
  'AN': [Country.France],
  'AR': [Country.France],
  'AS': [Country.France],
  'BA': [Country.France],
  'BJ': [Country.France],
  'BU': [Country.France],
  'CT': [Country.France],
  'DR': [Country.France],
  'DU': [Country.France],
  'DT': [Country.France],
  'ET': [Country.France],
  'FL': [Country.France, Country.USA],
  'FR': [Country.France],
  'MB': [Country.France],
  'MI': [Country.France],
  'NO': [Country.France],
  'RA': [Country.France],
  'RI': [Country.France],
  'SD': [Country.France, Country.USA],
  'SF': [Country.France],
  'SL': [Country.France],
  'SN': [Country.France],
  'SP': [Country.France],
  'SR': [Country.France],
  'TH': [Country.France],
  'VI': [Country.France],
  'VX': [Country.France],
  'LP': [Country.Germany],
  'OL': [Country.Germany],
  'BC': [Country.Italy],
  'BO': [Country.Italy],
  'CE': [Country.Italy],
  'FO': [Country.Italy],
  'MA': [Country.Italy],
  'OB': [Country.Italy],
  'RC': [Country.Italy],
  'RE': [Country.Italy],
  'SA': [Country.Italy],
  'TD': [Country.Italy],
  'CA': [Country.Spain],
  'GI': [Country.Spain],
  'LB': [Country.Spain],
  'LM': [Country.Spain],
  'LO': [Country.Spain],
  'LW': [Country.Spain],
  'UB': [Country.Spain],
  'DI': [Country.Switzerland],
  'FA': [Country.Switzerland],
  'FC': [Country.USA],
  'FH': [Country.USA],
  'LA': [Country.USA],
  'OS': [Country.USA],
  'TX': [Country.USA],
}


class FactoryLocationRegistry(BaseModel):
  """Lookup table of factory codes to countries, loadable from JSON in the form
  {"locations": {"FL": ["France", "USA"], ...}}. Codes are stored upper-cased and lookups are case-insensitive."""
  model_config = ConfigDict(frozen=True)

  locations: Dict[str, List[Country]]

  @field_validator('locations')
  @classmethod
  def normalize_codes(cls, locations: Dict[str, List[Country]]) -> Dict[str, List[Country]]:
    normalized: Dict[str, List[Country]] = {}
    for code, countries in locations.items():
      if not kFactoryCodePattern.fullmatch(code):
        raise ValueError(f"factory code {code!r} must be two non-digit characters")
      merged = normalized.setdefault(upper_invariant(code), [])  # 'fl' and 'FL' are the same factory
      for country in countries:
        if country not in merged:
          merged.append(country)
    return normalized

  @classmethod
  def from_json_file(cls, filename: str) -> 'FactoryLocationRegistry':
    with open(filename) as f:
      registry = cls.model_validate_json(f.read())
    log.debug("loaded %d factory codes from %s", len(registry.locations), filename)
    return registry

  def lookup(self, code: Optional[str]) -> Tuple[Country, ...]:
    """Returns the countries for a factory code, or an empty tuple if the code is unknown"""
    if not code:
      return ()
    return tuple(self.locations.get(upper_invariant(code), ()))

  def merged(self, other: 'FactoryLocationRegistry') -> 'FactoryLocationRegistry':
    """Returns a registry with the codes of both, other's countries appended after this one's"""
    locations = {code: list(countries) for code, countries in self.locations.items()}
    for code, countries in other.locations.items():
      locations.setdefault(code, []).extend(countries)
    return FactoryLocationRegistry(locations=locations)


kDefaultRegistry = FactoryLocationRegistry(locations=kFactoryLocations)


def lookup(code: Optional[str]) -> Tuple[Country, ...]:
  """Looks up a factory code in the built-in registry"""
  return kDefaultRegistry.lookup(code)
