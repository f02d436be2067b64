import pytest

from wordle_solver.words import Word


SAMPLE = """\
tears
bears
stear
rates
aster
crane
slate
cigar
rebut
sissy
humph
awake
blush
focal
evade
naval
serve
heath
dwarf
model
karma
stink
grade
quiet
bench
abate
feign
major
death
fresh
crust
stool
colon
abase
marry
react
batty
pride
floss
helix
"""


@pytest.fixture
def sample_words():
    return [Word(line) for line in SAMPLE.split()]


@pytest.fixture
def sample_text():
    return SAMPLE
