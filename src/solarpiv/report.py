"""Plain-text report of a SolarEstimate."""

from solarpiv.i18n import t
from solarpiv.models import SolarEstimate


def format_report(estimate: SolarEstimate, lang: str = "en") -> str:
    """Render a SolarEstimate as aligned label/value lines.

    Args:
        estimate: Output of `compute.run`.
        lang: 'ko' or 'en'.

    Returns:
        Multi-line string, no trailing newline.
    """
    ctx = estimate.context
    panel = estimate.panel
    r = estimate.result
    when = ctx.utc_dt.strftime("%Y-%m-%d %H:%M") if ctx.utc_dt else t("now", lang)
    facing = t(f"orientation_{panel.orientation.value}", lang)

    rows: list[tuple[str, str]] = [
        (t("label_place", lang), ctx.address_display),
        (t("label_time", lang), when),
        (
            t("label_panel", lang),
            f"{panel.tilt_deg:g}° {facing}, {panel.efficiency_pct:g}%",
        ),
        (t("label_area", lang), f"{r.area_m2:,.0f} m²"),
        (t("label_sunlight", lang), f"{r.sunlight_hours:g} h"),
        (t("label_altitude", lang), f"{r.sun_altitude:.0f}°"),
        (t("label_azimuth", lang), f"{r.sun_azimuth:.0f}°"),
        (t("label_shadow", lang), f"{r.shadow_coverage_pct:.0f} %"),
        (t("label_irradiance", lang), f"{r.avg_irradiance:.0f} W/m²"),
    ]
    if r.area_measured:
        rows += [
            (t("label_piv", lang), f"{r.piv_value:.2f} kWh/m²/day"),
            (t("label_power", lang), f"{r.estimated_monthly_power:,.0f} kWh/mo"),
            (t("label_annual", lang), f"{r.estimated_annual_power:,.0f} kWh/year"),
        ]

    width = max(len(label) for label, _ in rows)
    lines = [t("report_title", lang), "-" * len(t("report_title", lang))]
    lines += [f"{label.ljust(width)}  {value}" for label, value in rows]
    if not r.area_measured:
        lines.append(t("no_area", lang))
    return "\n".join(lines)
