import pytest

from vocamaster.exceptions import InvalidTransitionError
from vocamaster.session import Phase, SessionRunner


@pytest.mark.unit
def test_empty_session_is_immediately_complete():
    runner = SessionRunner.start([])

    assert runner.is_complete
    assert runner.results == []
    assert runner.current_word is None


@pytest.mark.unit
def test_full_run_collects_results_in_order(five_words):
    runner = SessionRunner.start(five_words[:3])
    assert runner.phase == Phase.PRESENTING
    assert runner.current_word.no == 1

    for answer in (True, False, True):
        runner = runner.reveal()
        assert runner.phase == Phase.REVEALED
        runner = runner.judge(answer)

    assert runner.is_complete
    assert [(r.word.no, r.is_correct) for r in runner.results] == [
        (1, True),
        (2, False),
        (3, True),
    ]


@pytest.mark.unit
def test_transitions_return_new_runners(five_words):
    runner = SessionRunner.start(five_words)

    revealed = runner.reveal()

    assert runner.phase == Phase.PRESENTING
    assert revealed.phase == Phase.REVEALED
    assert revealed.judge(True).index == 1
    assert revealed.index == 0


@pytest.mark.unit
def test_judge_before_reveal_is_rejected(five_words):
    runner = SessionRunner.start(five_words)

    with pytest.raises(InvalidTransitionError):
        runner.judge(True)


@pytest.mark.unit
def test_reveal_twice_is_rejected(five_words):
    runner = SessionRunner.start(five_words).reveal()

    with pytest.raises(InvalidTransitionError):
        runner.reveal()


@pytest.mark.unit
def test_complete_session_accepts_nothing(five_words):
    runner = SessionRunner.start(five_words[:1]).reveal().judge(False)

    with pytest.raises(InvalidTransitionError):
        runner.reveal()
    with pytest.raises(InvalidTransitionError):
        runner.judge(True)


@pytest.mark.unit
def test_progress_percent(five_words):
    runner = SessionRunner.start(five_words[:4])
    assert runner.progress_percent == 25

    runner = runner.reveal().judge(True)
    assert runner.progress_percent == 50
