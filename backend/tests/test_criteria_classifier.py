from unittest.mock import MagicMock, patch

import pytest

from models.schemas.filter_criteria import ClassificationResult, FilterCriteria
from services.criteria_classifier import (
    CRITERIA_LABELS,
    ZeroShotClassifier,
    extract_filter_criteria,
)
from conftest import StubClassifier


def test_query_tokens_fill_matching_fields():
    classifier = StubClassifier({
        "Seattle": ("location", 0.8),
        "Google": ("company", 0.75),
        "Python": ("job title", 0.3),
        "full-time": ("job type", 0.6),
    })
    criteria = extract_filter_criteria("Seattle Google Python full-time", classifier)
    assert criteria == FilterCriteria(location="Seattle", company="Google", job_type="full-time")
    assert criteria.job_title is None
    assert classifier.calls == ["Seattle", "Google", "Python", "full-time"]


def test_low_confidence_tokens_are_ignored():
    classifier = StubClassifier({
        "seattle": ("location", 0.9),
        "jobs": ("job title", 0.3),
    })
    criteria = extract_filter_criteria("jobs in seattle", classifier)
    assert criteria.location == "seattle"
    assert criteria.job_title is None


def test_score_equal_to_threshold_is_ignored():
    classifier = StubClassifier({"remote": ("location", 0.4)})
    assert extract_filter_criteria("remote", classifier, threshold=0.4).is_empty()


def test_last_qualifying_token_wins():
    classifier = StubClassifier({
        "seattle": ("location", 0.9),
        "boston": ("location", 0.6),
    })
    criteria = extract_filter_criteria("seattle boston", classifier)
    assert criteria.location == "boston"


def test_unknown_label_is_ignored():
    classifier = StubClassifier({"python": ("programming language", 0.99)})
    assert extract_filter_criteria("python", classifier).is_empty()


def test_failed_token_is_skipped():
    class FlakyClassifier(StubClassifier):
        def classify(self, text, candidate_labels):
            if text == "broken":
                raise RuntimeError("model crashed")
            return super().classify(text, candidate_labels)

    classifier = FlakyClassifier({"seattle": ("location", 0.9)})
    criteria = extract_filter_criteria("broken seattle", classifier)
    assert criteria == FilterCriteria(location="seattle")


def test_empty_result_is_skipped():
    classifier = MagicMock()
    classifier.classify.return_value = ClassificationResult()
    assert extract_filter_criteria("seattle", classifier).is_empty()


def test_empty_query():
    classifier = StubClassifier()
    assert extract_filter_criteria("", classifier).is_empty()
    assert classifier.calls == []


def test_candidate_labels_are_fixed():
    classifier = MagicMock()
    classifier.classify.return_value = ClassificationResult(labels=["location"], scores=[0.9])
    extract_filter_criteria("seattle", classifier)
    classifier.classify.assert_called_once_with("seattle", list(CRITERIA_LABELS))


# ---------------------------------------------------------------------------
# ZeroShotClassifier (transformers pipeline mocked)
# ---------------------------------------------------------------------------

@patch("services.criteria_classifier._get_zero_shot")
def test_zero_shot_classifier_wraps_pipeline(mock_get):
    pipe = MagicMock(return_value={
        "sequence": "seattle",
        "labels": ["location", "company", "job title", "job type"],
        "scores": [0.91, 0.05, 0.03, 0.01],
    })
    mock_get.return_value = pipe

    result = ZeroShotClassifier("some/model").classify("seattle", list(CRITERIA_LABELS))

    assert result.labels[0] == "location"
    assert result.scores[0] == pytest.approx(0.91)
    mock_get.assert_called_once_with("some/model")
    pipe.assert_called_once_with("seattle", candidate_labels=list(CRITERIA_LABELS))


@patch("services.criteria_classifier._get_zero_shot", return_value=None)
def test_zero_shot_classifier_unavailable(mock_get):
    with pytest.raises(RuntimeError):
        ZeroShotClassifier().classify("seattle", list(CRITERIA_LABELS))


@patch("services.criteria_classifier._get_zero_shot", return_value=None)
def test_unavailable_model_yields_empty_criteria(mock_get):
    criteria = extract_filter_criteria("seattle google", ZeroShotClassifier())
    assert criteria.is_empty()


@pytest.mark.integration
def test_real_zero_shot_model():
    criteria = extract_filter_criteria("seattle", ZeroShotClassifier())
    assert criteria.location == "seattle"
