import pytest
from pydantic import ValidationError

from models import Paper, U32_MAX, U64_MAX


def test_paper_is_immutable():
    paper = Paper(title="A", id=1, citation_count=2)
    with pytest.raises(ValidationError):
        paper.id = 3


def test_paper_accepts_full_unsigned_ranges():
    paper = Paper(title="", id=U64_MAX, citation_count=U32_MAX)
    assert paper.id == 18446744073709551615
    assert paper.citation_count == 4294967295


@pytest.mark.parametrize(
    "fields",
    [
        {"id": -1},
        {"id": U64_MAX + 1},
        {"id": 1, "citation_count": -1},
        {"id": 1, "citation_count": U32_MAX + 1},
    ],
)
def test_paper_rejects_out_of_range_values(fields):
    with pytest.raises(ValidationError):
        Paper(title="A", **fields)


def test_to_dict_omits_unset_citers():
    assert Paper(title="A", id=1, citation_count=2).to_dict() == {
        "title": "A",
        "id": 1,
        "citation_count": 2,
    }


def test_to_dict_nests_citers():
    citer = Paper(title="B", id=2, citation_count=0)
    target = Paper(title="A", id=1, citers=[citer])

    assert target.to_dict() == {
        "title": "A",
        "id": 1,
        "citation_count": None,
        "citers": [{"title": "B", "id": 2, "citation_count": 0}],
    }


def test_paper_with_citers_is_hashable_and_sealed():
    citer = Paper(title="B", id=2, citation_count=1)
    target = Paper(title="A", id=1, citers=[citer])

    assert target.citers == (citer,)
    assert hash(target) == hash(Paper(title="A", id=1, citers=(citer,)))
    assert len({target, Paper(title="A", id=1, citers=[citer])}) == 1
    with pytest.raises(AttributeError):
        target.citers.append(citer)
