"""Report model for the SiteCheck scan results."""

import json
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Tuple, Union

from sitecheck.core.errors import MalformedResponse

Pair = Tuple[str, str]
Triple = Tuple[str, str, str]


class FirewallStatus(Enum):
    NONE = "none"
    GENERIC = "generic"
    VENDOR = "vendor"

    @classmethod
    def from_flags(cls, has_waf: bool, has_vendor_waf: bool) -> "FirewallStatus":
        if has_vendor_waf:
            return cls.VENDOR
        if has_waf:
            return cls.GENERIC
        return cls.NONE


@dataclass(frozen=True)
class ApplicationDetails:
    """Web application findings (JSON ``WEBAPP``)."""
    warnings: Tuple[str, ...] = ()
    info: Tuple[Pair, ...] = ()
    versions: Tuple[str, ...] = ()
    notices: Tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.warnings or self.info or self.versions or self.notices)


@dataclass(frozen=True)
class BlacklistStatus:
    warnings: Tuple[Pair, ...] = ()     # blacklisted by
    clean: Tuple[Pair, ...] = ()        # checked and clean

    @property
    def is_empty(self) -> bool:
        return not (self.warnings or self.clean)


@dataclass(frozen=True)
class ScannerVersion:
    """Build metadata of the remote scanner (JSON ``VERSION``)."""
    version: Tuple[str, ...] = ()
    build_date: Tuple[str, ...] = ()
    database_date: Tuple[str, ...] = ()
    compiled_date: Tuple[str, ...] = ()


def _empty_mapping() -> Mapping[str, Tuple[str, ...]]:
    return MappingProxyType({})


@dataclass(frozen=True)
class Report:
    """Decoded scan report. Every collection defaults to empty."""
    site: Tuple[str, ...] = ()
    target_domains: Tuple[str, ...] = ()
    resolved_ips: Tuple[str, ...] = ()
    detected_cms: Tuple[str, ...] = ()
    firewall: FirewallStatus = FirewallStatus.NONE
    system_notes: Mapping[str, Tuple[str, ...]] = field(default_factory=_empty_mapping)
    application: ApplicationDetails = field(default_factory=ApplicationDetails)
    recommendations: Tuple[Triple, ...] = ()
    outdated: Tuple[Triple, ...] = ()
    links: Mapping[str, Tuple[str, ...]] = field(default_factory=_empty_mapping)
    blacklist: BlacklistStatus = field(default_factory=BlacklistStatus)
    malware: Tuple[Pair, ...] = ()
    version: ScannerVersion = field(default_factory=ScannerVersion)

    # ---------- decoding ----------

    @classmethod
    def from_json(cls, raw: Union[bytes, str]) -> "Report":
        """Decode the raw API response.

        Raises MalformedResponse, with the payload preserved in ``.raw``,
        when the body is not JSON or does not have the expected shape.
        """
        data = raw.encode("utf-8") if isinstance(raw, str) else bytes(raw)
        try:
            parsed = json.loads(data)
        except (ValueError, RecursionError) as e:
            # RecursionError: nesting deeper than the decoder can follow
            raise MalformedResponse(f"invalid JSON: {e}", raw=data) from e
        try:
            return cls.from_dict(parsed)
        except MalformedResponse as e:
            e.raw = data
            raise

    @classmethod
    def from_dict(cls, data: Any) -> "Report":
        root = _obj(data, "$")
        scan = _obj(root.get("SCAN"), "SCAN")
        waf = _obj(scan.get("WAF"), "SCAN.WAF")
        webapp = _obj(root.get("WEBAPP"), "WEBAPP")
        blacklist = _obj(root.get("BLACKLIST"), "BLACKLIST")
        malware = _obj(root.get("MALWARE"), "MALWARE")
        version = _obj(root.get("VERSION"), "VERSION")

        return cls(
            site=_strings(scan.get("SITE"), "SCAN.SITE"),
            target_domains=_strings(scan.get("DOMAIN"), "SCAN.DOMAIN"),
            resolved_ips=_strings(scan.get("IP"), "SCAN.IP"),
            detected_cms=_strings(scan.get("CMS"), "SCAN.CMS"),
            firewall=FirewallStatus.from_flags(
                _flag(waf.get("HASWAF"), "SCAN.WAF.HASWAF"),
                _flag(waf.get("HASSUCURIWAF"), "SCAN.WAF.HASSUCURIWAF"),
            ),
            system_notes=_groups(root.get("SYSTEM"), "SYSTEM"),
            application=ApplicationDetails(
                warnings=_strings(webapp.get("WARN"), "WEBAPP.WARN"),
                info=_tuples(webapp.get("INFO"), 2, "WEBAPP.INFO"),
                versions=_strings(webapp.get("VERSION"), "WEBAPP.VERSION"),
                notices=_strings(webapp.get("NOTICE"), "WEBAPP.NOTICE"),
            ),
            recommendations=_tuples(root.get("RECOMMENDATIONS"), 3, "RECOMMENDATIONS"),
            outdated=_tuples(root.get("OUTDATEDSCAN"), 3, "OUTDATEDSCAN"),
            links=_groups(root.get("LINKS"), "LINKS"),
            blacklist=BlacklistStatus(
                warnings=_tuples(blacklist.get("WARN"), 2, "BLACKLIST.WARN"),
                clean=_tuples(blacklist.get("INFO"), 2, "BLACKLIST.INFO"),
            ),
            malware=_tuples(malware.get("WARN"), 2, "MALWARE.WARN"),
            version=ScannerVersion(
                version=_strings(version.get("VERSION"), "VERSION.VERSION"),
                build_date=_strings(version.get("BUILDDATE"), "VERSION.BUILDDATE"),
                database_date=_strings(version.get("DBDATE"), "VERSION.DBDATE"),
                compiled_date=_strings(version.get("COMPILEDDATE"), "VERSION.COMPILEDDATE"),
            ),
        )


# ---------- shape helpers (null counts as absent) ----------

def _kind(value: Any) -> str:
    return type(value).__name__


def _obj(value: Any, where: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise MalformedResponse(f"{where}: expected object, got {_kind(value)}")
    return value


def _list(value: Any, where: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise MalformedResponse(f"{where}: expected array, got {_kind(value)}")
    return value


def _string(value: Any, where: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise MalformedResponse(f"{where}: expected string, got {_kind(value)}")
    return value


def _strings(value: Any, where: str) -> Tuple[str, ...]:
    return tuple(_string(v, f"{where}[{i}]") for i, v in enumerate(_list(value, where)))


def _tuples(value: Any, arity: int, where: str) -> tuple:
    out = []
    for i, item in enumerate(_list(value, where)):
        item_where = f"{where}[{i}]"
        fields = _strings(item, item_where)
        if len(fields) < arity:
            raise MalformedResponse(
                f"{item_where}: expected {arity} fields, got {len(fields)}")
        out.append(fields[:arity])
    return tuple(out)


def _groups(value: Any, where: str) -> Mapping[str, Tuple[str, ...]]:
    groups = {
        key: _strings(items, f"{where}.{key}")
        for key, items in _obj(value, where).items()
    }
    return MappingProxyType(groups)


def _flag(value: Any, where: str) -> bool:
    if value is None:
        return False
    # bool is an int subclass, both are accepted
    if not isinstance(value, int):
        raise MalformedResponse(f"{where}: expected integer, got {_kind(value)}")
    return value != 0
