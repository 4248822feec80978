# Static dashboard shell: a single index.html that embeds parse-sboms.json.

from __future__ import annotations

import html
import json
import logging
from pathlib import Path
from string import Template

from sbomdash.config import OUTPUT_HTML_NAME, THEMES
from sbomdash.errors import OutputDirectoryError
from sbomdash.findings.models import SEVERITY_LABELS, ParsedResult

logger = logging.getLogger(__name__)

# Severity -> CSS colour used for badges and summary cards
SEVERITY_COLORS = {
    "CRITICAL": "#ef4444",
    "HIGH": "#f97316",
    "MEDIUM": "#f59e0b",
    "LOW": "#10b981",
    "INFO": "#3b82f6",
    "UNKNOWN": "#94a3b8",
}

THEME_COLORS = {
    "dark": {"bg": "#0a0e14", "surface": "#1a1f2e", "border": "#2d3748", "text": "#e2e8f0", "muted": "#94a3b8"},
    "light": {"bg": "#f8fafc", "surface": "#ffffff", "border": "#e2e8f0", "text": "#0f172a", "muted": "#64748b"},
}

_PAGE = Template("""<!doctype html>
<html lang="en" data-theme="$theme">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width, initial-scale=1" />
<meta http-equiv="Content-Security-Policy" content="default-src 'self'; script-src 'self' 'unsafe-inline'; style-src 'self' 'unsafe-inline'; img-src 'self' data:;" />
<title>$title</title>
<style>
  :root { --bg: $bg; --surface: $surface; --border: $border; --text: $text; --muted: $muted; }
  body { margin: 0; padding: 1.5rem; background: var(--bg); color: var(--text); font-family: system-ui, sans-serif; }
  .cards { display: flex; flex-wrap: wrap; gap: .75rem; margin-bottom: 1rem; }
  .card { background: var(--surface); border: 1px solid var(--border); border-radius: 12px; padding: .75rem 1rem; min-width: 7rem; }
  .card .n { font-size: 1.5rem; font-weight: 600; }
  .muted { color: var(--muted); font-size: .8rem; }
  table { width: 100%; border-collapse: collapse; background: var(--surface); }
  th, td { text-align: left; padding: .4rem .6rem; border-bottom: 1px solid var(--border); font-size: .85rem; }
  .sev { font-weight: 600; }
  input { background: var(--surface); color: var(--text); border: 1px solid var(--border); border-radius: 8px; padding: .4rem .6rem; width: 20rem; margin: 1rem 0; }
</style>
<script>window.EMBEDDED_SBOM_DATA = $data;</script>
</head>
<body>
<h1>$title</h1>
<p class="muted">Generated $generated_at &middot; $total vulnerabilities &middot; fix available for $fix_rate%</p>
<div class="cards">$cards</div>
<h2>Top CVEs</h2>
<table><thead><tr><th>CVE</th><th>Worst severity</th><th>Count</th><th>Max CVSS</th><th>Datasets</th></tr></thead>
<tbody>$top_rows</tbody></table>
<h2>Vulnerabilities</h2>
<input id="filter" type="search" placeholder="Filter by id, component, severity or dataset" />
<table><thead><tr><th>Dataset</th><th>ID</th><th>Severity</th><th>CVSS</th><th>Component</th><th>Version</th><th>Fix</th><th>Title</th></tr></thead>
<tbody id="rows"></tbody></table>
<script>
(function () {
  var data = window.EMBEDDED_SBOM_DATA || { items: [] };
  var colors = $colors;
  var body = document.getElementById('rows');
  function cell(text) { var td = document.createElement('td'); td.textContent = text == null ? '' : String(text); return td; }
  function render(query) {
    var q = (query || '').toLowerCase();
    body.textContent = '';
    data.items
      .filter(function (r) {
        return !q || [r.id, r.component, r.severity, r.dataset, r.title].join(' ').toLowerCase().indexOf(q) !== -1;
      })
      .sort(function (a, b) { return (b.severityRank - a.severityRank) || ((b.cvss || 0) - (a.cvss || 0)); })
      .forEach(function (r) {
        var tr = document.createElement('tr');
        var sev = cell(r.severity);
        sev.className = 'sev';
        sev.style.color = colors[r.severity] || colors.UNKNOWN;
        [cell(r.dataset), cell(r.id), sev, cell(r.cvss), cell(r.component), cell(r.version),
         cell((r.fixedVersions || []).join(', ')), cell(r.title)].forEach(function (td) { tr.appendChild(td); });
        body.appendChild(tr);
      });
  }
  document.getElementById('filter').addEventListener('input', function (e) { render(e.target.value); });
  render('');
})();
</script>
</body>
</html>
""")


def embed_json(result: ParsedResult) -> str:
    """Serialize the result for a <script> element; <, > and & are escaped so it cannot close the tag."""
    payload = json.dumps(result.to_dict(), separators=(",", ":"))
    return payload.replace("<", "\\u003c").replace(">", "\\u003e").replace("&", "\\u0026")


def _severity_cards(result: ParsedResult) -> str:
    counts = result.overall.severity_counts
    cards = []
    for label in SEVERITY_LABELS:
        cards.append(
            f'<div class="card"><div class="muted">{label}</div>'
            f'<div class="n" style="color:{SEVERITY_COLORS[label]}">{counts.get(label, 0)}</div></div>'
        )
    return "".join(cards)


def _top_cve_rows(result: ParsedResult) -> str:
    labels = {4: "CRITICAL", 3: "HIGH", 2: "MEDIUM", 1: "LOW"}
    rows = []
    for entry in result.metrics.top_cves:
        max_cvss = "" if entry.max_cvss is None else f"{entry.max_cvss:g}"
        rows.append(
            "<tr>"
            f"<td>{html.escape(entry.id)}</td>"
            f"<td>{labels.get(entry.worst_severity_rank, 'INFO/UNKNOWN')}</td>"
            f"<td>{entry.count}</td>"
            f"<td>{max_cvss}</td>"
            f"<td>{html.escape(', '.join(entry.datasets))}</td>"
            "</tr>"
        )
    return "".join(rows)


def render_dashboard(result: ParsedResult, title: str, theme: str = "dark") -> str:
    """Render the dashboard page for a result. Unknown themes fall back to dark."""
    if theme not in THEMES:
        theme = "dark"
    return _PAGE.substitute(
        theme=theme,
        title=html.escape(title),
        data=embed_json(result),
        generated_at=html.escape(result.generated_at),
        total=result.overall.total,
        fix_rate=result.metrics.fix_availability_rate,
        cards=_severity_cards(result),
        top_rows=_top_cve_rows(result),
        colors=json.dumps(SEVERITY_COLORS),
        **THEME_COLORS[theme],
    )


def write_dashboard(result: ParsedResult, output_dir: Path, title: str, theme: str = "dark") -> Path:
    """Write index.html into output_dir and return its path."""
    output_file = output_dir / OUTPUT_HTML_NAME
    try:
        output_file.write_text(render_dashboard(result, title, theme), encoding="utf-8")
    except OSError as e:
        raise OutputDirectoryError(f"Cannot write {output_file}: {e}") from e
    logger.info("HTML UI generated at %s", output_file)
    return output_file
