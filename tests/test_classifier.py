"""Tests for the engine classifier."""

import itertools

import pytest

from game_engine_identifier import (
    UNKNOWN_ENGINE,
    DetectionResult,
    EngineClassifier,
    EngineConfig,
    Signature,
    classify,
    confidence_for_score,
    tally_scores,
)
from game_engine_identifier.signatures import (
    Extension,
    Filename,
    FilenameStartsWith,
    PathContains,
)


@pytest.fixture
def configs():
    return [
        EngineConfig(
            name="Unity",
            signatures=(
                Signature(Extension("assets"), 1.5),
                Signature(PathContains("_Data/Managed"), 2.0),
            ),
        ),
        EngineConfig(
            name="Godot",
            signatures=(Signature(Extension("pck"), 2.0),),
        ),
    ]


@pytest.fixture
def godot_only():
    return [EngineConfig(name="Godot", signatures=(Signature(Extension("pck"), 2.0),))]


class TestConfidenceForScore:
    @pytest.mark.parametrize(
        ("score", "expected"),
        [
            (-1.0, 0.0),
            (0.0, 0.0),
            (0.5, 0.5),
            (1.99, 0.5),
            (2.0, 0.8),
            (4.99, 0.8),
            (5.0, 1.0),
            (250.0, 1.0),
        ],
    )
    def test_thresholds(self, score, expected):
        assert confidence_for_score(score) == expected

    def test_monotonic_step_function(self):
        scores = [x / 4 for x in range(-4, 40)]
        levels = [confidence_for_score(s) for s in scores]
        assert levels == sorted(levels)
        assert set(levels) == {0.0, 0.5, 0.8, 1.0}


class TestClassifyScenarios:
    def test_extension_signature(self, godot_only):
        result = classify(["game.pck"], godot_only)
        assert result == DetectionResult(engine="Godot", confidence=0.8, matches=["game.pck"])

    def test_weighted_combination(self, configs):
        files = ["Game_Data/Managed/Assembly-CSharp.dll", "Game.exe"]
        result = classify(files, configs)
        assert result.engine == "Unity"
        assert result.confidence == 0.8
        assert result.matches == ["Game_Data/Managed/Assembly-CSharp.dll"]

    def test_no_match(self, godot_only):
        result = classify(["readme.txt"], godot_only)
        assert result == DetectionResult(engine=UNKNOWN_ENGINE, confidence=0.0, matches=[])

    def test_high_confidence_is_capped(self, configs):
        files = [f"Game_Data/Managed/lib{i}.dll" for i in range(10)]
        result = classify(files, configs)
        assert result.engine == "Unity"
        assert result.confidence == 1.0
        assert len(result.matches) == 10

    def test_overlapping_hits_reach_high_confidence(self, configs):
        # 3.5 per file, two files
        files = ["Game_Data/Managed/a.assets", "Game_Data/Managed/b.assets"]
        assert classify(files, configs).confidence == 1.0

    def test_one_file_matching_two_signatures(self, configs):
        path = "Game_Data/Managed/resources.assets"
        result = classify([path], configs)
        assert result.engine == "Unity"
        assert result.matches == [path, path]
        assert tally_scores([path], configs)[0].score == 3.5

    def test_low_confidence(self):
        configs = [EngineConfig(name="GameMaker", signatures=(Signature(Filename("options.ini"), 0.5),))]
        result = classify(["options.ini"], configs)
        assert result.engine == "GameMaker"
        assert result.confidence == 0.5


class TestClassifyDegenerate:
    def test_empty_files(self, configs):
        result = classify([], configs)
        assert result == DetectionResult(engine=UNKNOWN_ENGINE, confidence=0.0, matches=[])

    def test_empty_configs(self):
        result = classify(["game.pck", "UnityPlayer.dll"], [])
        assert result == DetectionResult(engine=UNKNOWN_ENGINE, confidence=0.0, matches=[])

    def test_engine_without_signatures(self):
        result = classify(["game.pck"], [EngineConfig(name="Empty")])
        assert result.engine == UNKNOWN_ENGINE

    def test_accepts_generator(self, godot_only):
        result = classify((f for f in ["a.pck", "b.pck"]), godot_only)
        assert result.confidence == 0.8
        assert result.matches == ["a.pck", "b.pck"]


class TestCaseInsensitivity:
    def test_path_case(self, configs):
        lower = classify(["game_data/managed/a.dll"], configs)
        upper = classify(["GAME_DATA/MANAGED/A.DLL"], configs)
        assert lower.engine == upper.engine == "Unity"
        assert lower.confidence == upper.confidence

    def test_value_case(self):
        upper = [EngineConfig(name="Godot", signatures=(Signature(Extension("PCK"), 2.0),))]
        lower = [EngineConfig(name="Godot", signatures=(Signature(Extension("pck"), 2.0),))]
        assert tally_scores(["Game.Pck"], upper)[0].score == tally_scores(["Game.Pck"], lower)[0].score == 2.0

    def test_matches_keep_original_case(self, godot_only):
        assert classify(["Data/GAME.PCK"], godot_only).matches == ["Data/GAME.PCK"]


class TestAccumulation:
    def test_order_independent(self, configs):
        files = [
            "Game_Data/Managed/a.dll",
            "Game_Data/level0.assets",
            "game.pck",
            "Game_Data/Managed/b.assets",
        ]
        totals = set()
        for perm in itertools.permutations(files):
            tallies = tally_scores(list(perm), configs)
            totals.add(tuple(t.score for t in tallies))
        assert totals == {(7.0, 2.0)}

    def test_tallies_in_declaration_order(self, configs):
        tallies = tally_scores([], configs)
        assert [t.name for t in tallies] == ["Unity", "Godot"]
        assert all(t.score == 0.0 for t in tallies)

    def test_duplicate_names_merge(self):
        configs = [
            EngineConfig(name="Godot", signatures=(Signature(Extension("pck"), 2.0),)),
            EngineConfig(name="Godot", signatures=(Signature(Extension("tscn"), 1.0),)),
        ]
        tallies = tally_scores(["game.pck", "main.tscn"], configs)
        assert len(tallies) == 1
        assert tallies[0].score == 3.0
        assert tallies[0].matches == ["game.pck", "main.tscn"]


class TestTieBreak:
    def test_first_declared_engine_wins(self):
        configs = [
            EngineConfig(name="Alpha", signatures=(Signature(Extension("dat"), 2.0),)),
            EngineConfig(name="Beta", signatures=(Signature(FilenameStartsWith("game"), 2.0),)),
        ]
        assert classify(["game.dat"], configs).engine == "Alpha"
        assert classify(["game.dat"], list(reversed(configs))).engine == "Beta"

    def test_higher_later_score_wins(self):
        configs = [
            EngineConfig(name="Alpha", signatures=(Signature(Extension("dat"), 1.0),)),
            EngineConfig(name="Beta", signatures=(Signature(FilenameStartsWith("game"), 1.5),)),
        ]
        assert classify(["game.dat"], configs).engine == "Beta"


class TestEngineClassifier:
    def test_default_profile(self):
        classifier = EngineClassifier()
        assert len(classifier.engines) > 0
        result = classifier.classify(["project.godot", "main.tscn", "game.pck"])
        assert result.engine == "Godot"
        assert result.confidence == 1.0

    def test_default_profile_unity(self):
        classifier = EngineClassifier()
        files = ["Game.exe", "UnityPlayer.dll", "Game_Data/Managed/Assembly-CSharp.dll"]
        result = classifier.classify(files)
        assert result.engine == "Unity"
        assert result.confidence == 1.0

    def test_from_config(self):
        classifier = EngineClassifier.from_config("tests/fixtures/test_engines.yaml")
        assert [e.name for e in classifier.engines] == ["Unity", "Godot"]
        assert classifier.classify(["game.pck"]).engine == "Godot"

    def test_empty_engine_list(self):
        classifier = EngineClassifier(engines=[])
        assert classifier.engines == ()
        assert classifier.classify(["game.pck"]).engine == UNKNOWN_ENGINE

    def test_classify_many(self, configs):
        classifier = EngineClassifier(engines=configs)
        results = classifier.classify_many([["game.pck"], ["readme.txt"], []])
        assert [r.engine for r in results] == ["Godot", UNKNOWN_ENGINE, UNKNOWN_ENGINE]

    def test_scores(self, configs):
        classifier = EngineClassifier(engines=configs)
        tallies = classifier.scores(["game.pck", "Game_Data/sharedassets0.assets"])
        assert {t.name: t.score for t in tallies} == {"Unity": 1.5, "Godot": 2.0}

    def test_engines_not_mutated(self, configs):
        classifier = EngineClassifier(engines=configs)
        before = classifier.engines
        classifier.classify(["game.pck"] * 3)
        assert classifier.engines == before
