"""
Tests for the classifier models and engine adapters.
"""

import asyncio

import pytest

from codetools.core.compactor import compact
from codetools.detection.aggregator import LanguageDetector
from codetools.detection.engines import (
    ENGINE_FACTORIES,
    HeuristicEngine,
    StatisticalEngine,
    create_engines,
)
from codetools.detection.heuristic import HeuristicClassifier, HeuristicResult
from codetools.detection.pygments_model import ModelResult, PygmentsModel

PYTHON_SNIPPET = """#!/usr/bin/env python
import os

def main():
    print(os.getcwd())

if __name__ == "__main__":
    main()
"""

GO_SNIPPET = """package main

import "fmt"

func main() {
\tfmt.Println("hello")
}
"""

JAVA_SNIPPET = """import java.util.List;

public class Main {
    public static void main(String[] args) {
        System.out.println("hi");
    }
}
"""

TYPESCRIPT_SNIPPET = """import { readFile } from "fs";

export interface Options {
  path: string;
}

export const retries: number = 3;

export function load(options: Options): Promise<string> {
  return readFile(options.path, "utf8");
}
"""

JAVA_WITH_COMMENT = """import java.util.List;

public class A {
    // note
    private List<String> items;
}
"""


class FakeModel:
    def __init__(self, results=None, available=True):
        self.results = results or []
        self.available = available

    def is_available(self):
        return self.available

    def run_model(self, text):
        return self.results


class FakeClassifier:
    def __init__(self, result):
        self.result = result

    def classify(self, text):
        return self.result


class TestHeuristicClassifier:
    def test_python(self):
        result = HeuristicClassifier().classify(PYTHON_SNIPPET)
        assert result.language == "python"
        assert result.relevance > 0

    def test_go(self):
        assert HeuristicClassifier().classify(GO_SNIPPET).language == "go"

    def test_java(self):
        assert HeuristicClassifier().classify(JAVA_SNIPPET).language == "java"

    def test_typescript(self):
        assert HeuristicClassifier().classify(TYPESCRIPT_SNIPPET).language == "typescript"

    def test_typed_declaration_beats_javascript(self):
        scores = HeuristicClassifier().score("export const y: number = items.length === 0 ? 1 : 2;")
        assert scores["typescript"] > scores["javascript"]

    def test_no_match_is_unknown(self):
        result = HeuristicClassifier().classify("???")
        assert result == HeuristicResult(language="unknown", relevance=0)

    def test_classification_is_highest_score(self):
        classifier = HeuristicClassifier()
        scores = classifier.score(PYTHON_SNIPPET)
        assert scores["python"] == max(scores.values())
        assert scores["python"] == classifier.classify(PYTHON_SNIPPET).relevance

    def test_ties_go_to_first_language(self):
        from codetools.detection.heuristic import _fp

        classifier = HeuristicClassifier(
            {"first": [_fp(r"x", 10)], "second": [_fp(r"y", 10)]}
        )
        assert classifier.classify("x y").language == "first"


class TestPygmentsModel:
    def test_ranks_python_shebang(self):
        model = PygmentsModel()
        results = model.run_model(PYTHON_SNIPPET)

        assert model.is_available()
        assert any(r.language_id == "python" and r.confidence == 1.0 for r in results)
        confidences = [r.confidence for r in results]
        assert confidences == sorted(confidences, reverse=True)
        assert all(0.0 <= c <= 1.0 for c in confidences)

    def test_respects_max_results(self):
        model = PygmentsModel(max_results=1, min_confidence=0.0)
        assert len(model.run_model(PYTHON_SNIPPET)) <= 1

    def test_initialization_failure_makes_model_unavailable(self, monkeypatch):
        def broken():
            raise RuntimeError("no lexers")

        monkeypatch.setattr("codetools.detection.pygments_model.get_all_lexers", broken)
        model = PygmentsModel()

        assert not model.is_available()
        assert model.run_model("print(1)") == []


class TestStatisticalEngine:
    def test_uses_top_guess_only(self):
        model = FakeModel([ModelResult("js", 0.7), ModelResult("python", 0.6)])
        candidate = asyncio.run(StatisticalEngine(model, weight=1.0).classify("x"))

        assert candidate.engine == "pygments"
        assert candidate.language == "javascript"
        assert candidate.confidence == 0.7

    def test_lexer_scores_are_weighted(self):
        model = FakeModel([ModelResult("python", 1.0)])
        candidate = asyncio.run(StatisticalEngine(model).classify("import x"))

        assert candidate.confidence == pytest.approx(StatisticalEngine.CONFIDENCE_WEIGHT)
        assert candidate.confidence <= 0.5

    def test_confidence_is_clamped(self):
        model = FakeModel([ModelResult("python", 3.5)])
        candidate = asyncio.run(StatisticalEngine(model, weight=1.0).classify("x"))
        assert candidate.confidence == 1.0

    def test_no_guess_gives_no_candidate(self):
        assert asyncio.run(StatisticalEngine(FakeModel([])).classify("x")) is None

    def test_availability_follows_model(self):
        assert not StatisticalEngine(FakeModel(available=False)).is_available()


class TestHeuristicEngine:
    def test_relevance_scaled_to_confidence(self):
        engine = HeuristicEngine(FakeClassifier(HeuristicResult("python", 80)))
        candidate = asyncio.run(engine.classify("x"))

        assert candidate.engine == "heuristic"
        assert candidate.language == "python"
        assert candidate.confidence == pytest.approx(0.8)

    def test_relevance_above_scale_is_clamped(self):
        engine = HeuristicEngine(FakeClassifier(HeuristicResult("go", 250)))
        assert asyncio.run(engine.classify("x")).confidence == 1.0

    def test_zero_relevance_gives_no_candidate(self):
        engine = HeuristicEngine(FakeClassifier(HeuristicResult("unknown", 0)))
        assert asyncio.run(engine.classify("x")) is None

    def test_alias_is_normalized(self):
        engine = HeuristicEngine(FakeClassifier(HeuristicResult("kt", 40)))
        assert asyncio.run(engine.classify("x")).language == "kotlin"


class TestCreateEngines:
    def test_keeps_configured_order(self):
        engines = create_engines(["heuristic", "pygments"])
        assert [e.engine_id for e in engines] == ["heuristic", "pygments"]

    def test_names_are_case_insensitive(self):
        assert create_engines([" Heuristic "])[0].engine_id == "heuristic"

    def test_unknown_engine(self):
        with pytest.raises(ValueError, match="Unknown detection engine"):
            create_engines(["magic"])

    def test_factories(self):
        assert set(ENGINE_FACTORIES) == {"pygments", "heuristic"}


class TestDefaultEngineOrder:
    """The configured default order is pygments first, then heuristic."""

    @pytest.fixture(scope="class")
    def detector(self):
        return LanguageDetector(create_engines(["pygments", "heuristic"]))

    @pytest.mark.parametrize(
        "text, expected",
        [
            (JAVA_SNIPPET, "java"),
            (JAVA_WITH_COMMENT, "java"),
            (GO_SNIPPET, "go"),
            ('package main\nimport "fmt"\nfunc main() {\n\tfmt.Println("hi")\n}\n', "go"),
            (TYPESCRIPT_SNIPPET, "typescript"),
        ],
    )
    def test_imports_do_not_force_python(self, detector, text, expected):
        result = asyncio.run(detector.detect(text))
        assert result.best == expected

    def test_python_still_detected(self, detector):
        assert asyncio.run(detector.detect(PYTHON_SNIPPET)).best == "python"

    def test_detected_java_compacts_as_c_style(self, detector):
        best = asyncio.run(detector.detect(JAVA_WITH_COMMENT)).best
        compacted = compact(JAVA_WITH_COMMENT, best)

        assert "\n" not in compacted
        assert "// note" not in compacted
        assert compacted.startswith("import java.util.List; public class A {")
