"""
Priority-country rules for geocoding search.

Two different checks live here and must not be confused:
- `term_suggests_country` is a loose keyword scan over the raw search term,
  used only to decide whether an extra country-restricted search is worth
  issuing. False positives just cost one provider call.
- `is_priority` is an exact country / country-code comparison on a result,
  used for ordering and for the suggestion `priority` flag.
"""
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional

from domain.models import PlaceCandidate

INDIA_KEYWORDS: FrozenSet[str] = frozenset({
    "goa", "mumbai", "delhi", "bangalore", "chennai", "kolkata", "hyderabad",
    "pune", "ahmedabad", "surat", "jaipur", "lucknow", "kanpur", "nagpur",
    "indore", "thane", "bhopal", "visakhapatnam", "pimpri", "patna", "vadodara",
    "ludhiana", "agra", "nashik", "faridabad", "meerut", "rajkot", "kalyan",
    "vasai", "varanasi", "srinagar", "aurangabad", "dhanbad", "amritsar",
    "navi mumbai", "allahabad", "ranchi", "howrah", "coimbatore", "jabalpur",
    "gwalior", "vijayawada", "jodhpur", "madurai", "raipur", "kota", "chandigarh",
    "guwahati", "solapur", "hubli", "bareilly", "moradabad", "mysore", "tiruchirappalli",
    "tiruppur", "gurgaon", "aligarh", "jalandhar", "bhubaneswar", "salem",
    "warangal", "guntur", "bhiwandi", "saharanpur", "gorakhpur", "bikaner",
    "amravati", "noida", "jamshedpur", "bhilai", "cuttack", "firozabad",
    "kochi", "bhavnagar", "dehradun", "durgapur", "asansol", "nanded",
    "kolhapur", "ajmer", "gulbarga", "jamnagar", "ujjain", "loni", "siliguri",
    "jhansi", "ulhasnagar", "nellore", "jammu", "sangli", "islampur", "kadapa",
})

# Keyword tables for countries we know how to prioritise, keyed by ISO code.
KEYWORDS_BY_COUNTRY = {
    "IN": INDIA_KEYWORDS,
}


@dataclass(frozen=True)
class PriorityCountry:
    code: str
    name: str
    keywords: FrozenSet[str] = frozenset()

    @classmethod
    def for_code(cls, code: str, name: str, keywords: Optional[Iterable[str]] = None) -> "PriorityCountry":
        """Build a PriorityCountry, falling back to the built-in keyword table for `code`."""
        if keywords is None:
            table = KEYWORDS_BY_COUNTRY.get(code.upper(), frozenset())
        else:
            table = frozenset(k.lower().strip() for k in keywords if k and k.strip())
        return cls(code=code.upper(), name=name, keywords=table)

    def term_suggests_country(self, term: str) -> bool:
        """Case-insensitive substring containment, in either direction."""
        needle = term.lower().strip()
        if not needle:
            return False
        return any(needle in keyword or keyword in needle for keyword in self.keywords)

    def is_priority(self, candidate: PlaceCandidate) -> bool:
        return candidate.country_code == self.code or candidate.country == self.name


DEFAULT_PRIORITY_COUNTRY = PriorityCountry.for_code("IN", "India")
