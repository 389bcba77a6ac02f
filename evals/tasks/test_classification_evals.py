"""
Classification Evals -- role detection and quality assessment.

CODE-BASED graders: every expected value follows from the indicator tables.
"""

import pytest

from framework_mapper.capability import (
    CapabilityClassifier,
    CapabilityQualityAssessor,
    CapabilityRole,
    Detected,
    NoSignal,
    Safeguard,
)
from framework_mapper.capability.quality import quality_bucket
from framework_mapper.capability.scoring import (
    count_occurrences,
    element_coverage,
    keyword_score,
    matched_phrases,
)

from evals.samples import GRC_TEXT, SCENARIO_A, SCENARIO_B, SCENARIO_C, VULN_TEXT


class TestKeywordScore:
    """Eval: The shared fold matches its formula."""

    def test_fraction_plus_occurrence_bonus(self):
        # 1 of 4 phrases, 2 occurrences -> 0.25 + 0.2
        score = keyword_score("audit the audit", ["audit", "report", "verify", "check"])
        assert score == pytest.approx(0.45)

    def test_occurrence_bonus_capped(self):
        text = "audit " * 20
        assert keyword_score(text, ["audit", "report", "verify", "check"]) == pytest.approx(0.75)

    def test_capped_at_one(self):
        assert keyword_score("audit report audit report", ["audit", "report"]) == 1.0

    def test_no_match_or_no_phrases_is_zero(self):
        assert keyword_score("nothing here", ["audit"]) == 0.0
        assert keyword_score("audit", []) == 0.0

    def test_substring_matching(self):
        assert matched_phrases("Central management console", ["manage"]) == ["manage"]
        assert count_occurrences("data in databases", ["data"]) == 2


class TestRoleDecision:
    """Eval: The priority-ordered decision rule picks the right role."""

    def test_direct_implementation_is_full(self, safeguard_1_1):
        result = CapabilityClassifier().classify(SCENARIO_A, safeguard_1_1)
        assert result.role == CapabilityRole.FULL
        assert result.implementation_score == 1.0
        assert result.outcome == Detected(CapabilityRole.FULL)

    def test_governance_platform(self, safeguard_1_1):
        result = CapabilityClassifier().classify(GRC_TEXT, safeguard_1_1)
        assert result.role == CapabilityRole.GOVERNANCE
        assert result.governance_score > result.validation_score > result.implementation_score

    def test_vulnerability_platform_full_for_7_1(self, manager):
        result = CapabilityClassifier().classify(VULN_TEXT, manager.get_safeguard("7.1"))
        assert result.role == CapabilityRole.FULL

    def test_vague_text_falls_back_to_facilitates(self, safeguard_1_1):
        result = CapabilityClassifier().classify(SCENARIO_C, safeguard_1_1)
        assert result.implementation_score <= 0.2
        assert result.role == CapabilityRole.FACILITATES
        assert result.is_fallback
        assert isinstance(result.outcome, NoSignal)
        assert result.raw_score == 0.0

    def test_weak_signals_fall_back(self, safeguard_1_1):
        result = CapabilityClassifier().classify(SCENARIO_B, safeguard_1_1)
        assert result.role == CapabilityRole.FACILITATES
        assert result.is_fallback

    def test_facilitation_language_is_detected_not_fallback(self, bare_safeguard):
        text = "We enhance and improve your existing tools through api integration"
        result = CapabilityClassifier().classify(text, bare_safeguard)
        assert result.role == CapabilityRole.FACILITATES
        assert not result.is_fallback

    def test_uncurated_safeguard_has_no_implementation_score(self, bare_safeguard):
        result = CapabilityClassifier().classify(SCENARIO_A, bare_safeguard)
        assert result.implementation_score == 0.0
        assert not result.role.is_implementation

    def test_partial_when_implementation_is_moderate(self, bare_safeguard):
        classifier = CapabilityClassifier(implementation_indicators={
            bare_safeguard.id: ("alpha", "beta", "gamma", "delta", "epsilon"),
        })
        # 1/5 + 0.1 = 0.3: above 0.2, not above 0.5
        result = classifier.classify("alpha only", bare_safeguard)
        assert result.role == CapabilityRole.PARTIAL

    def test_empty_text_never_raises(self, safeguard_1_1):
        result = CapabilityClassifier().classify("", safeguard_1_1)
        assert result.role == CapabilityRole.FACILITATES

    def test_evidence_language_validates(self, bare_safeguard):
        text = "We audit and report evidence, verify and validate with a dashboard."
        result = CapabilityClassifier().classify(text, bare_safeguard)
        assert result.outcome == Detected(CapabilityRole.VALIDATES)
        # 6/24 + capped 0.5 bonus
        assert result.validation_score == pytest.approx(0.75)
        assert result.facilitation_score < result.validation_score

    def test_validates_wins_a_tie_with_facilitates(self, bare_safeguard):
        classifier = CapabilityClassifier(role_indicators={
            CapabilityRole.GOVERNANCE: ("zzgov",),
            CapabilityRole.FACILITATES: ("alpha",),
            CapabilityRole.VALIDATES: ("beta",),
        })
        result = classifier.classify("alpha beta", bare_safeguard)
        assert result.validation_score == result.facilitation_score == 1.0
        assert result.outcome == Detected(CapabilityRole.VALIDATES)

    def test_stronger_facilitation_beats_validation(self, bare_safeguard):
        classifier = CapabilityClassifier(role_indicators={
            CapabilityRole.GOVERNANCE: ("zzgov",),
            CapabilityRole.FACILITATES: ("alpha",),
            CapabilityRole.VALIDATES: ("beta", "gamma"),
        })
        # validation 1/2 + 0.1 = 0.6, facilitation 1.0
        result = classifier.classify("alpha beta", bare_safeguard)
        assert result.outcome == Detected(CapabilityRole.FACILITATES)
        assert not result.is_fallback


class TestAdditionalRoles:
    """Eval: Secondary roles are reported without changing the primary."""

    def test_grc_text_additional_roles(self, safeguard_1_1):
        result = CapabilityClassifier().classify(GRC_TEXT, safeguard_1_1)
        assert result.additional_roles() == [CapabilityRole.PARTIAL, CapabilityRole.VALIDATES]
        assert result.role == CapabilityRole.GOVERNANCE

    def test_primary_never_repeated(self, safeguard_1_1):
        result = CapabilityClassifier().classify(SCENARIO_A, safeguard_1_1)
        extra = result.additional_roles()
        assert result.role not in extra
        assert CapabilityRole.PARTIAL not in extra


class TestQualityAssessment:
    """Eval: Quality signals, buckets and gaps."""

    @pytest.mark.parametrize("score,bucket", [
        (1.0, "excellent"),
        (0.8, "excellent"),
        (0.79, "good"),
        (0.6, "good"),
        (0.4, "fair"),
        (0.39, "poor"),
        (0.0, "poor"),
    ])
    def test_buckets(self, score, bucket):
        assert quality_bucket(score) == bucket

    def test_full_coverage_is_excellent(self, safeguard_1_1):
        qa = CapabilityQualityAssessor().assess_quality(
            SCENARIO_A, safeguard_1_1, CapabilityRole.FULL
        )
        assert qa.quality == "excellent"
        assert qa.confidence == 100
        assert qa.gaps == []
        assert len(qa.evidence) == 4

    def test_missing_primary_signal_is_a_gap(self, bare_safeguard):
        qa = CapabilityQualityAssessor().assess_quality(
            "comprehensive and automated", bare_safeguard, CapabilityRole.FULL
        )
        assert qa.confidence == 40
        assert qa.quality == "fair"
        assert qa.gaps == ["Limited evidence of direct safeguard implementation"]

    def test_validates_signals(self, bare_safeguard):
        qa = CapabilityQualityAssessor().assess_quality(
            "audit trail reports with dashboard monitoring", bare_safeguard, CapabilityRole.VALIDATES
        )
        assert qa.confidence == 100

    def test_facilitates_signals(self, bare_safeguard):
        qa = CapabilityQualityAssessor().assess_quality(
            "We enhance workflows via API", bare_safeguard, CapabilityRole.FACILITATES
        )
        assert qa.confidence == 100
        assert any("api" in e for e in qa.evidence)

    def test_governance_without_policy_language(self, bare_safeguard):
        qa = CapabilityQualityAssessor().assess_quality(
            "oversight of compliance", bare_safeguard, CapabilityRole.GOVERNANCE
        )
        assert qa.confidence == 60
        assert qa.gaps == ["Limited governance capabilities evident"]

    def test_nothing_matched_is_poor(self, bare_safeguard):
        for role in CapabilityRole:
            qa = CapabilityQualityAssessor().assess_quality("lorem ipsum", bare_safeguard, role)
            assert qa.quality == "poor"
            assert qa.confidence == 0
            assert len(qa.gaps) == 1

    def test_safeguard_keywords_count_as_coverage(self, safeguard_1_1):
        # "asset" is a catalog keyword for 1.1, not a curated phrase
        qa = CapabilityQualityAssessor().assess_quality(
            "an asset register", safeguard_1_1, CapabilityRole.FULL
        )
        assert qa.gaps == []
        assert qa.confidence == 40
        assert "asset" in qa.matched_phrases


ASSET_RECORD = Safeguard(
    id="99.2",
    title="Synthetic Asset Record",
    core_requirements=("asset owner", "machine name", "serial number"),
    sub_taxonomical_elements=("mobile", "servers", "virtual machines"),
    governance_elements=("approval board", "change council"),
)


class TestElementCoverage:
    """Eval: Implementation quality credits coverage of the safeguard's element lists."""

    def test_coverage_fraction(self):
        coverage, found = element_coverage("Asset Owner and serial number", ASSET_RECORD.core_requirements)
        assert coverage == pytest.approx(2 / 3)
        assert found == ["asset owner", "serial number"]

    def test_empty_element_list_is_zero(self):
        assert element_coverage("anything at all", ()) == (0.0, [])

    def test_every_tier_fires(self):
        text = (
            "We record the asset owner and machine name for mobile and servers, "
            "signed off by the approval board."
        )
        qa = CapabilityQualityAssessor().assess_quality(text, ASSET_RECORD, CapabilityRole.FULL)
        # 0.4 + 0.3 + 0.3; no curated phrases, so the coverage gap stays
        assert qa.confidence == 100
        assert qa.evidence == [
            "Strong coverage of core requirements (2/3)",
            "Good coverage of sub-taxonomical elements (2/3)",
            "Addresses governance requirements (1/2)",
        ]
        assert qa.gaps == ["Limited evidence of direct safeguard implementation"]
        assert "approval board" in qa.matched_phrases

    @pytest.mark.parametrize("core,confidence", [
        (("asset owner", "machine name", "serial number", "purchase date"), 20),
        (("asset owner", "machine name", "serial number", "purchase date", "location"), 0),
    ])
    def test_core_tier_floor_is_exclusive(self, core, confidence):
        safeguard = Safeguard(id="99.3", core_requirements=core)
        qa = CapabilityQualityAssessor().assess_quality(
            "only the asset owner is recorded", safeguard, CapabilityRole.PARTIAL
        )
        assert qa.confidence == confidence

    def test_not_applied_to_other_roles(self):
        text = "asset owner, machine name, mobile, servers, approval board"
        qa = CapabilityQualityAssessor().assess_quality(text, ASSET_RECORD, CapabilityRole.GOVERNANCE)
        assert not any("coverage" in e or "Addresses governance" in e for e in qa.evidence)

    def test_catalog_elements_feed_quality(self, manager):
        text = (
            "Our documented procedures cover vulnerability identification and "
            "vulnerability assessment across the vulnerability management process."
        )
        qa = CapabilityQualityAssessor().assess_quality(
            text, manager.get_safeguard("7.1"), CapabilityRole.FULL
        )
        assert "Strong coverage of core requirements (4/5)" in qa.evidence
