import re
from decimal import Decimal, ROUND_HALF_UP

# Seconds per unit suffix, for time specifications like "90s", "2m" or "0.5h".
UNIT_SECONDS = {
    "s": 1,
    "m": 60,
    "h": 3600,
}

_TIME_SPEC = re.compile(r"\s*(\d+(?:\.\d+)?|\.\d+)\s*([smh])\s*")


# Raised when a time specification isn't <number><s|m|h>.
class InvalidFormat(ValueError):
    pass


# Parses the spec into a positive number of whole seconds. Fractions are scaled by the unit first and then rounded
# half-up, so "0.5s" is 1 and "0.5m" is 30.
def parse_time_spec(spec):
    if not isinstance(spec, str):
        raise InvalidFormat(f"Time specification must be a string, got {type(spec).__name__}")
    match = _TIME_SPEC.fullmatch(spec)
    if match is None:
        raise InvalidFormat(f"Invalid time specification '{spec}', expected <number><s|m|h> such as '90s' or '5m'")

    number, unit = match.groups()
    seconds = int((Decimal(number) * UNIT_SECONDS[unit]).quantize(Decimal(1), rounding=ROUND_HALF_UP))
    if seconds < 1:
        raise InvalidFormat(f"Time specification '{spec}' rounds to {seconds} seconds, must be at least 1 second")
    return seconds
