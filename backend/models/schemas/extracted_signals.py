"""Structured signals pulled out of résumé text by the signal extractor."""

from pydantic import BaseModel


class ExtractedSignals(BaseModel):
    """Résumé signals used to compose the search query.

    All strings are lowercase, deduplicated (first occurrence kept), longer
    than one character and never stop words.
    """
    model_config = {"frozen": True}

    job_titles: tuple[str, ...] = ()
    technologies: tuple[str, ...] = ()
    years_of_experience: float | None = None
    raw_section_keywords: tuple[str, ...] = ()

    def is_empty(self) -> bool:
        return not (self.job_titles or self.technologies or self.years_of_experience)
