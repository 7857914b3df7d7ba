"""Integration test fixtures: a generated corpus of extracted-text files."""

from __future__ import annotations

import random
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Corpus definition
# ---------------------------------------------------------------------------

FILLER = (
    "the results of the experiment were recorded in table 3 and discussed below "
    "further work is needed to confirm these observations across other datasets"
).split()

# Spellings of the query literals as pdftotext tends to produce them
PRIMARY_FORMS = ["neural network", "neural\nnetwork", "neuralnetwork", "neural \n\t network"]
TRANSFORMER_FORMS = ["transformer", "trans former", "trans-\nformer"]
CORPUS_SIZE = 120


def _document(rng: random.Random, index: int) -> tuple[str, bool]:
    """Build one document and whether it should match the corpus query."""
    words = [rng.choice(FILLER) for _ in range(rng.randint(50, 200))]
    has_primary = index % 3 != 0
    has_group = index % 2 == 0

    if has_primary:
        words.insert(rng.randrange(len(words)), rng.choice(PRIMARY_FORMS))
    if has_group:
        form = rng.choice(TRANSFORMER_FORMS)
        words.insert(rng.randrange(len(words)), form)
        # The query literal has no space, so split spellings must not match.
        has_group = form == "transformer"
    if index % 5 == 0:
        words.insert(rng.randrange(len(words)), "attention")
        has_group = True

    return " ".join(words), has_primary and has_group


@pytest.fixture
def large_corpus(tmp_path: Path) -> tuple[list[Path], set[str]]:
    """CORPUS_SIZE generated files and the paths expected to match.

    The corpus query is ``"neural network" & (transformer | attention)``.
    """
    rng = random.Random(1234)
    files: list[Path] = []
    expected: set[str] = set()
    for index in range(CORPUS_SIZE):
        text, should_match = _document(rng, index)
        path = tmp_path / f"doc{index:03d}.txt"
        path.write_text(text, encoding="utf-8")
        files.append(path)
        if should_match:
            expected.add(str(path))
    return files, expected
