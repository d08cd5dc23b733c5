import pytest

from vocamaster.models import QuizOrder, QuizSettings, WordEntry
from vocamaster.selector import QuizFactory, ReviewQuizGenerator, select_review, select_words


def make_words(numbers):
    return [WordEntry(no=n, word=f"word{n}", meaning=f"meaning{n}") for n in numbers]


@pytest.mark.unit
def test_sequential_takes_first_words_in_range(five_words):
    settings = QuizSettings(range_start=1, range_end=5, question_count=3, order=QuizOrder.SEQUENTIAL)

    selection = select_words(five_words, settings)

    assert [w.no for w in selection] == [1, 2, 3]


@pytest.mark.unit
def test_sequential_sorts_unordered_sparse_numbers():
    words = make_words([40, 7, 12, 3, 25])
    settings = QuizSettings(range_start=5, range_end=30, question_count=10, order=QuizOrder.SEQUENTIAL)

    selection = select_words(words, settings)

    assert [w.no for w in selection] == [7, 12, 25]


@pytest.mark.unit
@pytest.mark.parametrize("order", list(QuizOrder))
@pytest.mark.parametrize(
    "range_start,range_end,count,expected",
    [
        (1, 20, 5, 5),
        (1, 20, 50, 20),
        (5, 8, 10, 4),
        (15, 15, 3, 1),
        (30, 40, 10, 0),
        (10, 5, 10, 0),
    ],
)
def test_selection_size_and_range(order, range_start, range_end, count, expected):
    words = make_words(range(1, 21))
    settings = QuizSettings(
        range_start=range_start, range_end=range_end, question_count=count, order=order
    )

    selection = select_words(words, settings)

    assert len(selection) == expected
    assert all(range_start <= w.no <= range_end for w in selection)
    assert len({w.no for w in selection}) == len(selection)


@pytest.mark.unit
def test_random_does_not_mutate_source():
    words = make_words(range(1, 31))
    original = list(words)
    settings = QuizSettings(range_start=1, range_end=30, question_count=30, order=QuizOrder.RANDOM)

    selection = select_words(words, settings)

    assert words == original
    assert sorted(w.no for w in selection) == list(range(1, 31))


@pytest.mark.unit
@pytest.mark.parametrize("count", [0, -3])
@pytest.mark.parametrize("order", list(QuizOrder))
def test_zero_or_negative_count_selects_nothing(count, order):
    settings = QuizSettings(range_start=1, range_end=5, question_count=count, order=order)

    assert select_words(make_words(range(1, 6)), settings) == []


@pytest.mark.unit
def test_empty_word_store():
    settings = QuizSettings(range_start=1, range_end=5, question_count=5, order=QuizOrder.RANDOM)

    assert select_words([], settings) == []


@pytest.mark.unit
def test_review_includes_every_missed_word_uncapped():
    missed = make_words([9, 2, 57, 14])

    selection = select_review(missed)

    assert sorted(w.no for w in selection) == [2, 9, 14, 57]
    assert [w.no for w in missed] == [9, 2, 57, 14]


@pytest.mark.unit
def test_factory_modes():
    review = QuizFactory.create("review")
    assert isinstance(review, ReviewQuizGenerator)
    assert sorted(w.no for w in review.generate(make_words([3, 1]), None)) == [1, 3]
    with pytest.raises(ValueError):
        QuizFactory.create("alphabetical")
