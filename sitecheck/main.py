import argparse
import sys
from sitecheck.core.client import SiteCheckClient
from sitecheck.core.config import ScanConfig
from sitecheck.core.errors import MalformedResponse, SiteCheckError
from sitecheck.reporters.console import Log
from sitecheck.reporters.report import ReportRenderer

DESCRIPTION = """\
SiteCheck, Web Application Security Scanner

The malware scanner is a free tool powered by Sucuri SiteCheck, it will
check your website for known malware, blacklisting status, website errors,
and out-of-date software. Full accuracy is not realistic, and not
guaranteed."""


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="sitecheck", description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter)
    p.add_argument("-d", "--domain", required=True,
                   help="Domain name or web application to scan")
    p.add_argument("-c", "--cache", action="store_true",
                   help="Recycle the results from a previous scan")
    p.add_argument("-e", "--export", action="store_true",
                   help="Export scan results as a JSON encoded string")
    p.add_argument("--timeout", type=float, default=30.0,
                   help="HTTP timeout in seconds (default: 30)")
    p.add_argument("--no-color", action="store_true",
                   help="Plain text report without ANSI styling")
    p.add_argument("--sort-links", action="store_true",
                   help="List link categories alphabetically")
    p.add_argument("-v", "--verbose", action="count", default=1,
                   help="-v, -vv")
    p.add_argument("-q", "--quiet", action="store_true",
                   help="Only print the report and errors")
    return p


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    config = ScanConfig.from_args(args)
    log = Log(verbose=0 if args.quiet else args.verbose)

    try:
        with SiteCheckClient(config, logger=log) as client:
            result = client.scan()
    except MalformedResponse as e:
        log.fail(f"Malformed response: {e}")
        log.debug(e.raw.decode("utf-8", errors="replace"))
        return 1
    except SiteCheckError as e:
        log.fail(str(e))
        return 1

    out = sys.stdout
    if result.report is None:
        out.flush()
        out.buffer.write(result.raw + b"\n")
        out.buffer.flush()
        return 0

    version = result.report.version
    if version.version:
        log.debug(f"Scanner {', '.join(version.version)} "
                  f"(database {', '.join(version.database_date) or 'unknown'})")
    renderer = ReportRenderer(color=config.color, sort_links=config.sort_links)
    for line in renderer.render(result.report):
        print(line, file=out)
    report = result.report
    if report.blacklist.warnings:
        log.warn(f"{config.domain} is blacklisted by {len(report.blacklist.warnings)} service(s)")
    if report.malware:
        log.warn(f"{len(report.malware)} malware payload(s) detected on {config.domain}")
    log.ok(f"Scan of {config.domain} finished")
    return 0


if __name__ == "__main__":
    sys.exit(main())
