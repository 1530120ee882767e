"""Unit tests for the Normalizer entry point.

Tests normalize() for:
- Synonym, partial and exact matching
- Unusable input (None, empty, blank, non-string)
- Punctuation cleaning and typo tolerance settings
- Built-in vocabulary behaviour
- Consecutive-run bonuses on long titles
- Deterministic tie-breaking, add_mapping, explain() and rank()
"""

import logging
from unittest.mock import MagicMock

import pytest

from title_normalizer import Normalizer
from title_normalizer.config.models import AppConfig, MatchingConfig

LONG_TITLE = "Senior Full Stack Software Engineer specializing in Cloud Computing"


@pytest.fixture
def normalizer():
    """Normalizer with a software and an accounting title."""
    return Normalizer({
        "Software Engineer": {"developer", "coder"},
        "Accountant": {"bookkeeper", "finance"},
    })


@pytest.fixture
def cloud_normalizer():
    """Normalizer with overlapping cloud titles."""
    return Normalizer({
        LONG_TITLE: {"developer", "coder"},
        "Software Engineer": {"programmer", "full", "stack", "cloud"},
        "Cloud Computing Specialist": {"cloud", "computing"},
    })


class TestValidNormalisation:
    """Tests for valid synonyms and titles."""

    def test_synonyms_map_to_their_title(self, normalizer):
        assert normalizer.normalize("developer") == "Software Engineer"
        assert normalizer.normalize("bookkeeper") == "Accountant"

    def test_exact_title_beats_partial_and_synonym_matches(self):
        normalizer = Normalizer({
            "Software Engineer": {"developer", "coder"},
            "Engineer": {"technician", "operator"},
        })
        assert normalizer.normalize("Engineer") == "Engineer"

    def test_punctuation_kept_when_cleaning_disabled(self, normalizer):
        """'coder!' does not match, 'developer' still does."""
        assert normalizer.normalize("developer coder!") == "Software Engineer"

    def test_mixed_case_input(self):
        normalizer = Normalizer({"Software Engineer": {"developer", "coder"}})
        assert normalizer.normalize("DeVelOper") == "Software Engineer"

    def test_partial_title_match(self):
        normalizer = Normalizer({
            "Software Engineer": {"developer", "coder"},
            "Engineer": {"technician"},
        })
        assert normalizer.normalize("sda engineer") == "Engineer"

    def test_every_title_matches_itself(self, cloud_normalizer):
        for title in cloud_normalizer.titles():
            assert cloud_normalizer.normalize(title) == title
            assert cloud_normalizer.normalize(title.upper()) == title

    @pytest.mark.parametrize("allow_typos", [True, False])
    @pytest.mark.parametrize("clean_special_characters", [True, False])
    @pytest.mark.parametrize("title", ["Engineer", "C# Developer", "C Developer", "Head of R&D"])
    def test_exact_match_ignores_settings(self, title, allow_typos, clean_special_characters):
        normalizer = Normalizer(
            {"Engineer": set(), "C# Developer": set(), "C Developer": set(), "Head of R&D": set()},
            allow_typos=allow_typos,
            clean_special_characters=clean_special_characters,
            defaults={},
        )
        assert normalizer.normalize(f"  {title.lower()} ") == title
        assert normalizer.explain(title).is_exact

    def test_punctuated_title_matches_after_cleaning_is_enabled(self):
        normalizer = Normalizer({"C# Developer": set(), "C Developer": set()}, defaults={})
        normalizer.set_clean_special_characters(True)

        assert normalizer.normalize("C# Developer") == "C# Developer"
        assert normalizer.normalize("C Developer!") == "C Developer"


class TestUnknownOrNoSynonyms:
    """Tests for input that matches nothing."""

    def test_unknown_title(self):
        normalizer = Normalizer({"Software Engineer": {"developer", "coder"}})
        assert normalizer.normalize("unknown") is None

    def test_empty_synonym_set(self):
        normalizer = Normalizer({"Software Engineer": set()})
        assert normalizer.normalize("dev") is None


class TestNullOrEmptyInput:
    """Tests for unusable input."""

    @pytest.mark.parametrize("value", [None, "", "   ", "\t\n"])
    @pytest.mark.parametrize("allow_typos", [True, False])
    def test_no_match(self, normalizer, value, allow_typos):
        normalizer.set_allow_typos(allow_typos)
        assert normalizer.normalize(value) is None

    @pytest.mark.parametrize("value", [42, ["developer"], object()])
    def test_non_string_input(self, normalizer, value):
        assert normalizer.normalize(value) is None

    def test_only_punctuation_with_cleaning(self, normalizer):
        normalizer.set_clean_special_characters(True)
        assert normalizer.normalize("!!! ???") is None


class TestMultipleTokens:
    """Tests for inputs with several matching tokens."""

    def test_highest_score_wins(self):
        normalizer = Normalizer({
            "Software Engineer": {"developer", "coder"},
            "Engineer": set(),
        })
        assert normalizer.normalize("engineer developer") == "Software Engineer"

    def test_synonym_and_partial_match_together(self):
        normalizer = Normalizer({
            "Software Engineer": {"developer", "coder"},
            "Engineer": {"technician", "operator"},
        })
        assert normalizer.normalize("developer engineer") == "Software Engineer"

    def test_consecutive_words_beat_many_synonyms(self):
        normalizer = Normalizer({
            "Software Architect": {"developer", "coder"},
            "Engineer": {"technician", "operator"},
            "Code Reviewer": {"tcl", "Prolog", "perl", "VB"},
        })
        assert normalizer.normalize("software Architect - tcl prolog perl vb") == "Software Architect"

    def test_extra_words_are_ignored(self):
        normalizer = Normalizer({
            "Software Engineer": {"developer", "coder"},
            "Engineer": {"technician"},
        })
        assert normalizer.normalize("the best developer ever") == "Software Engineer"


class TestSharedSynonyms:
    """Tests for synonyms that point at several titles."""

    def test_higher_total_score_wins(self):
        normalizer = Normalizer({
            "Senior Software Engineer": {"Manager", "coder"},
            "Database": {"Manager", "bookkeeper"},
        })
        assert normalizer.normalize("Database Manager") == "Database"

    def test_equal_scores_resolve_to_first_title_alphabetically(self):
        normalizer = Normalizer({
            "Software Engineer": {"developer", "coder"},
            "Programmer": {"coder", "developer"},
        })
        assert normalizer.normalize("developer coder") == "Programmer"

    def test_results_are_deterministic(self):
        mapping = {
            "Software Engineer": {"developer", "coder"},
            "Programmer": {"coder", "developer"},
        }
        results = {Normalizer(mapping).normalize("developer coder") for _ in range(5)}
        first = Normalizer(mapping)
        results.update(first.normalize("developer coder") for _ in range(5))
        assert results == {"Programmer"}


class TestPunctuationCleaning:
    """Tests with special-character cleaning enabled."""

    @pytest.mark.parametrize(
        "text",
        [
            "developer, coder!",
            "coder! developer.",
            "!developer, @coder#",
            "DeVeLoPer!",
            "the best coder, developer...",
        ],
    )
    def test_punctuation_is_cleaned(self, normalizer, text):
        normalizer.set_clean_special_characters(True)
        assert normalizer.normalize(text) == "Software Engineer"

    def test_cleaning_enabled_at_construction(self):
        normalizer = Normalizer({"Software Engineer": {"developer"}}, clean_special_characters=True)
        assert normalizer.clean_special_characters is True
        assert normalizer.normalize("developer!!") == "Software Engineer"


class TestTypos:
    """Tests with typo tolerance enabled."""

    def test_minor_typo(self, normalizer):
        normalizer.set_allow_typos(True)
        assert normalizer.normalize("engneer") == "Software Engineer"

    def test_medium_typo(self, normalizer):
        normalizer.set_allow_typos(True)
        assert normalizer.normalize("sftwre") == "Software Engineer"

    def test_severe_typo(self, normalizer):
        normalizer.set_allow_typos(True)
        assert normalizer.normalize("sofwise engonoor") is None

    def test_misspelt_synonyms_do_not_match(self, normalizer):
        normalizer.set_allow_typos(True)
        assert normalizer.normalize("finace") is None

    def test_typos_can_be_switched_off_again(self, normalizer):
        normalizer.set_allow_typos(True)
        assert normalizer.normalize("engneer") == "Software Engineer"
        normalizer.set_allow_typos(False)
        assert normalizer.normalize("engneer") is None

    def test_typos_enabled_at_construction(self):
        normalizer = Normalizer(allow_typos=True)
        assert normalizer.allow_typos is True
        assert normalizer.normalize("acountant") == "Accountant"


class TestDefaultNormalizer:
    """Tests for the built-in vocabulary."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("java", "Software Engineer"),
            ("Java engineer", "Software Engineer"),
            ("C# engineer", "Software Engineer"),
            ("Chief Accountant", "Accountant"),
            ("programmer coder", "Software Engineer"),
            ("coder architect designer", "Architect"),
            ("financial bookkeeper", "Accountant"),
            ("surveyor construction", "Quantity Surveyor"),
            ("programmer developer", "Software Engineer"),
            ("expert programmer in java with experience", "Software Engineer"),
        ],
    )
    def test_default_matches(self, text, expected):
        assert Normalizer().normalize(text) == expected

    def test_no_matches(self):
        assert Normalizer().normalize("artist musician") is None

    def test_defaults_can_be_replaced(self):
        normalizer = Normalizer({"Pilot": {"aviator"}}, defaults={})
        assert normalizer.titles() == {"Pilot"}
        assert normalizer.normalize("java") is None


class TestConsecutiveBonus:
    """Tests for long titles matched word by word."""

    def test_consecutive_partial_titles(self, cloud_normalizer):
        text = "Senior Full Stack Software Engineer with Cloud Computing expertise"
        assert cloud_normalizer.normalize(text) == LONG_TITLE

    def test_consecutive_words_beat_lots_of_synonyms(self):
        normalizer = Normalizer({
            LONG_TITLE: {"developer", "coder"},
            "Software Engineer": {"programmer", "full", "stack", "cloud"},
            "Cloud Computing Specialist": {
                "senior", "cloud", "computing", "full", "stack", "engineer", "expertise",
            },
        })
        text = "Senior Full Stack Software Engineer with Cloud Computing expertise"
        assert normalizer.normalize(text) == LONG_TITLE

    def test_consecutive_partial_titles_with_typos(self, cloud_normalizer):
        cloud_normalizer.set_allow_typos(True)
        text = "Senior Ful Stack Sofware Engineer with Clud Computing expertise"
        assert cloud_normalizer.normalize(text) == LONG_TITLE

    def test_separate_consecutive_runs(self, cloud_normalizer):
        text = "New! Senior Full Stck Software Engineer with Cloud Computing expertise"
        assert cloud_normalizer.normalize(text) == LONG_TITLE


class TestAddMapping:
    """Tests for extending the vocabulary at runtime."""

    def test_new_title_becomes_matchable(self, normalizer):
        normalizer.add_mapping("Data Scientist", ["ml"])

        assert normalizer.normalize("ml") == "Data Scientist"
        assert normalizer.normalize("data person") == "Data Scientist"
        assert normalizer.normalize("DATA SCIENTIST") == "Data Scientist"

    def test_single_string_synonym(self):
        normalizer = Normalizer(defaults={})
        normalizer.add_mapping("Pilot", "aviator")

        assert normalizer.normalize("aviator") == "Pilot"
        assert normalizer.normalize("a") is None

    def test_existing_synonyms_are_kept(self):
        normalizer = Normalizer({"Software Engineer": {"developer"}}, defaults={})
        normalizer.add_mapping("Programmer", ["developer", "coder"])

        assert "developer" in normalizer.index.synonyms_for("Software Engineer")
        assert normalizer.normalize("coder developer") == "Programmer"
        # Tie on the shared synonym resolves alphabetically
        assert normalizer.normalize("developer") == "Programmer"


class TestExplainAndRank:
    """Tests for explain() and rank()."""

    def test_explain_scored_match(self):
        result = Normalizer().explain("Java engineer")

        assert result.title == "Software Engineer"
        assert result.score == 6
        assert result.match_type == "scored"
        assert result.tokens == ["java", "engineer"]
        assert result.candidates == [("Software Engineer", 6)]
        assert len(result.scoring.token_matches) == 2

    def test_explain_exact_match(self):
        result = Normalizer().explain("architect")

        assert result.is_exact
        assert result.match_type == "exact"
        assert result.scoring is None

    def test_explain_no_match(self):
        result = Normalizer().explain(None)

        assert not result.is_match
        assert result.match_type == "no-match"
        assert result.candidates == []

    def test_rank(self):
        normalizer = Normalizer()

        assert normalizer.rank("coder architect designer") == [
            ("Architect", 6),
            ("Software Engineer", 2),
        ]
        assert normalizer.rank("coder architect designer", limit=1) == [("Architect", 6)]
        assert normalizer.rank("Architect") == [("Architect", 0)]
        assert normalizer.rank("artist") == []


class TestFromConfig:
    """Tests for building a Normalizer from configuration."""

    def test_from_config(self):
        app_config = AppConfig(
            titles={"Data Scientist": ["ml"]},
            matching=MatchingConfig(allow_typos=True, include_defaults=False),
        )

        normalizer = Normalizer.from_config(app_config)

        assert normalizer.titles() == {"Data Scientist"}
        assert normalizer.allow_typos is True
        assert normalizer.clean_special_characters is False

    def test_from_default_config(self):
        normalizer = Normalizer.from_config(AppConfig())
        assert "Software Engineer" in normalizer.titles()


class TestLogging:
    """Tests for structured log events."""

    def test_match_events(self, caplog):
        caplog.set_level(logging.DEBUG, logger="title_normalizer")
        normalizer = Normalizer()

        normalizer.normalize("Architect")
        normalizer.normalize("java")
        normalizer.normalize("artist")

        events = [getattr(record, "event", None) for record in caplog.records]
        assert "index.built" in events
        assert "normalizer.match.exact" in events
        assert "normalizer.match.scored" in events
        assert "normalizer.match.none" in events

    def test_records_carry_component(self, caplog):
        caplog.set_level(logging.DEBUG, logger="title_normalizer")

        Normalizer().normalize("java")

        scored = [r for r in caplog.records if getattr(r, "event", None) == "normalizer.match.scored"]
        assert scored[0].component == "normalizer"
        assert scored[0].title == "Software Engineer"

    def test_injected_logger_reaches_index_and_engine(self):
        mock_logger = MagicMock()
        normalizer = Normalizer(logger_instance=mock_logger)

        normalizer.normalize("java")
        normalizer.add_mapping("Pilot", ["aviator"])

        info_events = [c.kwargs["extra"]["event"] for c in mock_logger.info.call_args_list]
        debug_events = [c.kwargs["extra"]["event"] for c in mock_logger.debug.call_args_list]
        assert "index.built" in info_events
        assert "index.mapping.added" in info_events
        assert "scoring.completed" in debug_events
        assert "normalizer.match.scored" in debug_events
        assert normalizer.index.logger is mock_logger
        assert normalizer.engine.logger is mock_logger
