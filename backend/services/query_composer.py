"""Compose extracted résumé signals into a single string for embedding."""

from models.schemas.extracted_signals import ExtractedSignals


def compose_query(signals: ExtractedSignals) -> str:
    """Build 'Job Titles: …. Technologies: …. Years of Experience: N'.

    Clauses keep this fixed order and are omitted when empty. Zero years
    counts as absent.
    """
    parts: list[str] = []
    if signals.job_titles:
        parts.append(f"Job Titles: {', '.join(signals.job_titles)}")
    if signals.technologies:
        parts.append(f"Technologies: {', '.join(signals.technologies)}")
    years = signals.years_of_experience
    if years:
        # 3.0 -> "3", 12.3456789 stays as extracted
        parts.append(f"Years of Experience: {int(years) if float(years).is_integer() else years}")
    return ". ".join(parts)
