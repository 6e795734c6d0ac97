"""Terminal rendering of a decoded scan report.

Rendering is a pure transformation: ``ReportRenderer.render`` returns the
report as a list of lines (ANSI styling embedded) and never writes anything.
The caller decides where the lines go.
"""

from typing import Iterable, List, Tuple

from colorama import Fore, Style

from sitecheck.core.models import FirewallStatus, Report

LINE_WIDTH = 97
MAX_LINES = 10
INDENT = "   "
ELLIPSIS = "..."

BULLET = "•"
CROSS = "✘"
CHECK = "✔"

# 256-colour header backgrounds (colorama only knows the basic 16)
BG_NEUTRAL = "008"
BG_ADVICE = "068"
BG_LINKS = "097"
BG_ALERT = "161"
BG_CLEAN = "034"

FIREWALL_LABELS = {
    FirewallStatus.VENDOR: "Vendor Firewall",
    FirewallStatus.GENERIC: "Generic Firewall",
    FirewallStatus.NONE: "No firewall detected",
}


def clean_payload(text: str) -> str:
    """Drop newlines, tabs and carriage returns."""
    return text.replace("\n", "").replace("\t", "").replace("\r", "")


def truncate_payload(text: str, limit: int) -> str:
    if len(text) > limit:
        return text[:limit] + ELLIPSIS
    return text


def justify(text: str, line_width: int = LINE_WIDTH, max_lines: int = MAX_LINES) -> str:
    """Reflow *text* into indented fixed-width lines.

    The text is cleaned, capped at ``line_width * max_lines`` characters
    (an ellipsis marks the cut) and broken every ``line_width`` characters
    regardless of word boundaries. The block ends with a blank line.
    """
    text = truncate_payload(clean_payload(text), line_width * max_lines)
    chunks = [text[i:i + line_width] for i in range(0, len(text), line_width)]
    return "".join(f"{INDENT}{chunk}\n" for chunk in chunks) + "\n"


class ReportRenderer:
    def __init__(self, color: bool = True, sort_links: bool = False,
                 line_width: int = LINE_WIDTH, max_lines: int = MAX_LINES):
        self.color = color
        self.sort_links = sort_links
        self.line_width = line_width
        self.max_lines = max_lines

    # ---------- styling ----------

    def _paint(self, style: str, text: str) -> str:
        if not self.color:
            return text
        return f"{style}{text}{Style.RESET_ALL}"

    def _header(self, title: str, background: str) -> str:
        return self._paint(f"\033[48;5;{background}m", f" @ {title} ")

    def _label(self, name: str) -> str:
        return self._paint(Style.BRIGHT + Fore.LIGHTMAGENTA_EX, f"{name}:")

    # ---------- public API ----------

    def render(self, report: Report) -> List[str]:
        sections = [
            self._website_information(report),
            self._application_details(report),
            self._bulleted("Recommendations", report.recommendations, bold=True),
            self._bulleted("Outdated Components", report.outdated),
            *self._links(report),
            self._blacklist_status(report),
            self._malware_payloads(report),
        ]
        lines: List[str] = []
        for section in sections:
            if not section:
                continue
            if lines:
                lines.append("")
            lines.extend(section)
        return lines

    # ---------- sections (an empty list means "omit") ----------

    def _website_information(self, report: Report) -> List[str]:
        out = [self._header("Website Information", BG_NEUTRAL)]
        for name, values in (("Site", report.site),
                             ("Domain", report.target_domains),
                             ("IP", report.resolved_ips),
                             ("CMS", report.detected_cms)):
            out.append(f" {self._label(name)} {', '.join(values)}")

        firewall = FIREWALL_LABELS[report.firewall]
        if report.firewall is FirewallStatus.NONE:
            firewall = self._paint(Fore.LIGHTRED_EX, firewall)
        out.append(f" {self._label('Firewall')} {firewall}")

        for notes in report.system_notes.values():
            out.extend(f" {self._paint(Style.DIM, note)}" for note in notes)
        return out

    def _application_details(self, report: Report) -> List[str]:
        app = report.application
        if app.is_empty:
            return []
        out = [self._header("Application Details", BG_NEUTRAL)]
        out.extend(f" {w}" for w in app.warnings)
        out.extend(f" {label} {self._paint(Style.DIM, detail)}" for label, detail in app.info)
        out.extend(f" {v}" for v in app.versions)
        out.extend(f" {n}" for n in app.notices)
        return out

    def _bulleted(self, title: str, entries: Iterable[Tuple[str, str, str]], bold: bool = False) -> List[str]:
        entries = list(entries)
        if not entries:
            return []
        out = [self._header(title, BG_ADVICE)]
        bullet = self._paint(Fore.LIGHTBLUE_EX, BULLET)
        for head, first, second in entries:
            if bold:
                head = self._paint(Style.BRIGHT, head)
            out.append(f" {bullet} {head}")
            out.append(f"{INDENT}{first}")
            out.append(f"{INDENT}{second}")
        return out

    def _links(self, report: Report) -> List[List[str]]:
        categories = list(report.links.items())
        if self.sort_links:
            categories.sort(key=lambda kv: kv[0])
        out = []
        for category, urls in categories:
            if not urls:
                continue
            out.append([self._header(f"Links {category}", BG_LINKS)]
                       + [f" {url}" for url in urls])
        return out

    def _blacklist_status(self, report: Report) -> List[str]:
        status = report.blacklist
        if status.is_empty:
            return []
        background = BG_ALERT if status.warnings else BG_CLEAN
        out = [self._header("Blacklist Status", background)]
        cross = self._paint(Fore.LIGHTRED_EX, CROSS)
        for label, detail in status.warnings:
            out.append(f" {cross} {label}")
            out.append(f"{INDENT}{detail}")
        check = self._paint(Fore.LIGHTGREEN_EX, CHECK)
        for label, detail in status.clean:
            out.append(f" {check} {label}")
            out.append(f"{INDENT}{detail}")
        return out

    def _malware_payloads(self, report: Report) -> List[str]:
        if not report.malware:
            return []
        out = [self._header("Malware Payloads", BG_ALERT)]
        bullet = self._paint(Fore.LIGHTRED_EX, BULLET)
        for label, payload in report.malware:
            out.append(f" {bullet} {label}")
            block = justify(payload, self.line_width, self.max_lines)
            # the block ends in "\n\n": keep its trailing blank line
            out.extend(block.split("\n")[:-1])
        return out


def render(report: Report, color: bool = True, sort_links: bool = False) -> List[str]:
    return ReportRenderer(color=color, sort_links=sort_links).render(report)
