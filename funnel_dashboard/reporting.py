"""Static HTML dashboard for a filtered campaign dataset."""

from __future__ import annotations

from datetime import datetime
from html import escape
from pathlib import Path
from typing import List, Sequence

from funnel_dashboard.application.reporting.metrics import (
    MetricCard,
    conversion_bars,
    efficiency_cards,
    fmt_count,
    headline_cards,
)
from funnel_dashboard.application.reporting.rendering import date_range_text, preview_table, record_count_text
from funnel_dashboard.domain.models import REQUIRED_COLUMNS, CampaignRecord, FilterState, FunnelStage, SummaryTotals

FUNNEL_COLORS: List[str] = ["#8884d8", "#82ca9d", "#ffc658", "#ff8042"]


def _render_cards(cards: Sequence[MetricCard]) -> str:
    return "".join(
        "<div class=\"card\">"
        f"<div class=\"card-title\" title=\"{escape(card.tooltip)}\">{escape(card.title)}</div>"
        f"<div class=\"card-value\">{escape(card.value)}</div>"
        "</div>"
        for card in cards
    )


def _render_funnel(stages: Sequence[FunnelStage]) -> str:
    top = max((stage.value for stage in stages), default=0)
    rows: List[str] = []
    for idx, stage in enumerate(stages):
        width = (stage.value / top * 100) if top > 0 else 0.0
        width = max(0.0, min(100.0, width))
        color = FUNNEL_COLORS[idx % len(FUNNEL_COLORS)]
        rows.append(
            "<div class=\"funnel-row\">"
            f"<span class=\"funnel-label\">{escape(stage.name)}</span>"
            f"<div class=\"funnel-bar\" style=\"width: {width:.2f}%; background: {color};\">"
            f"{escape(fmt_count(stage.value))}</div>"
            "</div>"
        )
    return "".join(rows)


def _render_conversion(summary: SummaryTotals) -> str:
    return "".join(
        "<div class=\"rate-row\">"
        f"<div class=\"rate-label\">{escape(bar.label)}</div>"
        f"<div class=\"rate-track\"><div class=\"rate-bar\" style=\"width: {bar.width_pct:.2f}%;\">"
        f"{escape(bar.text)}</div></div>"
        "</div>"
        for bar in conversion_bars(summary)
    )


def _render_preview(records: Sequence[CampaignRecord], limit: int) -> str:
    head = "".join(f"<th>{escape(column)}</th>" for column in REQUIRED_COLUMNS)
    body = "".join(
        "<tr>" + "".join(f"<td>{escape(cell)}</td>" for cell in row) + "</tr>"
        for row in preview_table(records, limit)
    )
    if not body:
        body = f"<tr><td class=\"muted\" colspan=\"{len(REQUIRED_COLUMNS)}\">No records match the current filters.</td></tr>"
    return f"<table><thead><tr>{head}</tr></thead><tbody>{body}</tbody></table>"


def write_html_report(
    output_path: Path,
    summary: SummaryTotals,
    stages: Sequence[FunnelStage],
    records: Sequence[CampaignRecord],
    total_records: int,
    filters: FilterState,
    source_name: str = "",
    preview_rows: int = 10,
) -> None:
    generated_at = datetime.now().strftime("%Y-%m-%d %H:%M")
    filter_text = f"{date_range_text(filters)} | Ad Group: {filters.ad_group}"

    html = f"""<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>Revenue Dashboard</title>
  <style>
    :root {{
      --bg: #f3f6fb;
      --panel: #ffffff;
      --line: #d5dce8;
      --text: #0f172a;
      --sub: #475569;
      --brand: #2563eb;
    }}
    * {{ box-sizing: border-box; }}
    body {{
      margin: 0;
      background: var(--bg);
      color: var(--text);
      font-family: "Segoe UI", sans-serif;
    }}
    .wrap {{
      max-width: 1400px;
      margin: 0 auto;
      padding: 20px;
    }}
    .panel {{
      background: var(--panel);
      border: 1px solid var(--line);
      border-radius: 14px;
      box-shadow: 0 4px 16px rgba(15, 23, 42, 0.05);
      padding: 14px 18px;
      margin-bottom: 14px;
    }}
    h1 {{
      margin: 0 0 8px;
      color: var(--brand);
      font-size: 28px;
    }}
    .meta, .muted {{ color: var(--sub); font-size: 13px; }}
    .cards {{
      display: grid;
      grid-template-columns: repeat(4, minmax(180px, 1fr));
      gap: 12px;
      margin-bottom: 14px;
    }}
    .card {{
      background: var(--panel);
      border: 1px solid var(--line);
      border-radius: 12px;
      padding: 14px;
    }}
    .card-title {{
      font-size: 12px;
      text-transform: uppercase;
      letter-spacing: 0.05em;
      color: var(--sub);
    }}
    .card-value {{ font-size: 26px; font-weight: 700; margin-top: 6px; }}
    .funnel-row, .rate-row {{ margin-bottom: 8px; }}
    .funnel-label, .rate-label {{ display: block; font-size: 13px; margin-bottom: 3px; }}
    .funnel-bar, .rate-bar {{
      color: #fff;
      font-weight: 700;
      padding: 4px 8px;
      border-radius: 6px;
      white-space: nowrap;
      min-width: 60px;
    }}
    .rate-track {{ background: #e2e8f0; border-radius: 6px; }}
    .rate-bar {{ background: var(--brand); }}
    table {{
      width: 100%;
      border-collapse: collapse;
      font-size: 12px;
    }}
    th, td {{
      border: 1px solid var(--line);
      padding: 6px 8px;
      text-align: left;
    }}
    th {{ background: #eef4ff; }}
    @media (max-width: 1080px) {{
      .cards {{ grid-template-columns: repeat(2, 1fr); }}
    }}
  </style>
</head>
<body>
  <div class="wrap">
    <section class="panel">
      <h1>Revenue Dashboard</h1>
      <div class="meta">Source: {escape(source_name or "-")} | Filters: {escape(filter_text)} | Generated: {escape(generated_at)}</div>
      <p>{escape(record_count_text(len(records), total_records))}</p>
    </section>
    <section class="cards">{_render_cards(headline_cards(summary))}</section>
    <section class="panel">
      <h2>Acquisition Funnel</h2>
      {_render_funnel(stages)}
    </section>
    <section class="panel">
      <h2>Funnel Conversion Rates</h2>
      {_render_conversion(summary)}
    </section>
    <section class="cards">{_render_cards(efficiency_cards(summary))}</section>
    <section class="panel">
      <h2>Detailed Data</h2>
      {_render_preview(records, preview_rows)}
    </section>
  </div>
</body>
</html>
"""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(html, encoding="utf-8")
