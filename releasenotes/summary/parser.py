"""
Markdown scraping for Gemini summaries.

The model is asked for markdown tables under fixed "## ..." headings. This
module pulls rows out of those tables with plain string splitting. Output
that does not match the expected shape produces empty lists, never errors.
"""

from __future__ import annotations

INDUSTRY_USE_CASES_HEADING = "## Industry Use Cases"
KEY_FEATURES_HEADING = "## Key Features and Announcements"


def extract_section(markdown: str, heading: str) -> str | None:
    """Text after heading up to the next '##' (or end of string); None if absent."""
    if not markdown or heading not in markdown:
        return None
    after = markdown.split(heading, 1)[1]
    return after.split("##", 1)[0]


def _is_separator(line: str) -> bool:
    return "---" in line


def _split_row(line: str) -> list[str]:
    cells = [cell.strip() for cell in line.strip().split("|")]
    # Leading and trailing pipes produce empty edge cells
    if cells and cells[0] == "":
        cells = cells[1:]
    if cells and cells[-1] == "":
        cells = cells[:-1]
    return cells


def parse_table_rows(section: str | None) -> list[list[str]]:
    """Data rows of the first pipe table in section, as trimmed cells.

    Separator lines are dropped, and so is a header row directly followed by a
    separator.
    """
    if not section:
        return []

    lines = [line.strip() for line in section.splitlines() if line.strip().startswith("|")]
    rows: list[list[str]] = []
    for index, line in enumerate(lines):
        if _is_separator(line):
            continue
        next_line = lines[index + 1] if index + 1 < len(lines) else ""
        if _is_separator(next_line):
            continue
        cells = _split_row(line)
        if any(cells):
            rows.append(cells)
    return rows


def extract_industry_use_cases(markdown: str) -> list[str]:
    """'Industry: Use Case' for each row of the Industry Use Cases table."""
    use_cases = []
    for cells in parse_table_rows(extract_section(markdown, INDUSTRY_USE_CASES_HEADING)):
        industry = cells[0]
        use_case = cells[1] if len(cells) > 1 else ""
        use_cases.append(f"{industry}: {use_case}" if use_case else industry)
    return use_cases


def extract_key_features(markdown: str) -> list[str]:
    """First cell of each row of the Key Features and Announcements table."""
    return [
        cells[0]
        for cells in parse_table_rows(extract_section(markdown, KEY_FEATURES_HEADING))
        if cells[0]
    ]
