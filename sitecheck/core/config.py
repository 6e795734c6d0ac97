"""Runtime options for a single scan."""

from dataclasses import dataclass

SERVICE = "https://sitecheck.sucuri.net"


@dataclass
class ScanConfig:
    domain: str
    use_cache: bool = False     # reuse the upstream's previous scan
    export: bool = False        # dump raw JSON instead of the report
    timeout: float = 30.0
    service: str = SERVICE
    color: bool = True
    sort_links: bool = False

    @property
    def url(self) -> str:
        base = self.service.rstrip("/")
        if self.use_cache:
            return f"{base}/api/v2/?json&scan={self.domain}"
        return f"{base}/api/v2/?json&clear&scan={self.domain}"

    @classmethod
    def from_args(cls, args) -> "ScanConfig":
        return cls(
            domain=args.domain,
            use_cache=args.cache,
            export=args.export,
            timeout=args.timeout,
            color=not args.no_color,
            sort_links=args.sort_links,
        )
