"""MaxMind GeoIP2 lookup used by the resolver's IP-geolocation step."""

import logging

import geoip2.database
from geoip2.errors import AddressNotFoundError, GeoIP2Error

logger = logging.getLogger(__name__)


class MaxMindGeoIP:
    """Country lookup against a local GeoLite2 database.

    The reader is opened lazily on first use and reused afterwards.
    Every failure is reported as "no region" so the resolver can move on.
    """

    def __init__(self, db_path: str):
        self._db_path = db_path
        self._reader: geoip2.database.Reader | None = None

    def _get_reader(self) -> geoip2.database.Reader:
        if self._reader is None:
            self._reader = geoip2.database.Reader(self._db_path)
        return self._reader

    def lookup_region(self, ip_address: str) -> str | None:
        try:
            response = self._get_reader().country(ip_address)
        except AddressNotFoundError:
            logger.debug("IP %s not found in GeoIP database", ip_address)
            return None
        except ValueError:
            logger.debug("Invalid IP address %r", ip_address)
            return None
        except (GeoIP2Error, OSError) as e:
            logger.warning(f"GeoIP lookup failed: {e}")
            return None
        return response.country.iso_code

    def close(self) -> None:
        if self._reader is not None:
            self._reader.close()
            self._reader = None
