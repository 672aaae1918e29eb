import random

import pytest

from millionaire import db
from millionaire.errors import InvalidState
from millionaire.models import GameQuestion


def test_variants(game_question):
    q = game_question.question
    assert game_question.variants() == {
        'a': q.answer2,
        'b': q.answer1,
        'c': q.answer4,
        'd': q.answer3,
    }


def test_answer_correct(game_question):
    assert game_question.answer_correct('b')
    assert not game_question.answer_correct('a')
    assert not game_question.answer_correct('wrong answer')


def test_correct_answer_key(game_question):
    assert game_question.correct_answer_key() == 'b'
    assert game_question.variants()[game_question.correct_answer_key()] == game_question.question.answer1


def test_text_and_level_delegate(game_question):
    assert game_question.text == game_question.question.text
    assert game_question.level == game_question.question.level


def test_help_hash_persists_in_place_changes(game_question):
    assert game_question.help_hash == {}

    game_question.help_hash['test_key1'] = 'test1'
    game_question.help_hash['test_key2'] = 'test2'
    db.session.commit()
    db.session.expire_all()

    reloaded = db.session.get(GameQuestion, game_question.id)
    assert reloaded.help_hash == {'test_key1': 'test1', 'test_key2': 'test2'}


def test_audience_help(game_question):
    assert 'audience_help' not in game_question.help_hash

    game_question.add_audience_help()

    assert 'audience_help' in game_question.help_hash
    votes = game_question.help_hash['audience_help']
    assert sorted(votes.keys()) == ['a', 'b', 'c', 'd']
    assert all(v >= 0 for v in votes.values())
    assert sum(votes.values()) == 100


def test_fifty_fifty(game_question):
    assert 'fifty_fifty' not in game_question.help_hash

    game_question.add_fifty_fifty()

    ff = game_question.help_hash['fifty_fifty']
    assert 'b' in ff
    assert len(ff) == 2
    assert len(set(ff)) == 2


def test_friend_call(game_question):
    assert 'friend_call' not in game_question.help_hash

    game_question.add_friend_call()

    fc = game_question.help_hash['friend_call']
    assert 'believes the answer is option' in fc
    assert sum(fc.endswith(f'option {letter}') for letter in 'ABCD') == 1


def test_audience_help_after_fifty_fifty_only_votes_remaining_letters(game_question):
    game_question.add_fifty_fifty(rng=random.Random(3))
    remaining = set(game_question.help_hash['fifty_fifty'])

    votes = game_question.add_audience_help(rng=random.Random(3))

    assert sorted(votes.keys()) == ['a', 'b', 'c', 'd']
    for letter, count in votes.items():
        if letter not in remaining:
            assert count == 0


def test_help_cannot_be_used_twice_on_a_question(game_question):
    game_question.add_fifty_fifty()
    before = list(game_question.help_hash['fifty_fifty'])

    with pytest.raises(InvalidState):
        game_question.add_fifty_fifty()
    assert game_question.help_hash['fifty_fifty'] == before


def test_help_is_saved(game_question):
    game_question.add_friend_call()
    db.session.expire_all()

    reloaded = db.session.get(GameQuestion, game_question.id)
    assert 'friend_call' in reloaded.help_hash


class FirstChoice:
    """Always picks the first candidate."""

    def choice(self, seq):
        return seq[0]


def test_to_dict_hides_correct_slot(game_question):
    # correct is 'b'; the wrong letter picked is 'a'
    game_question.add_fifty_fifty(rng=FirstChoice())

    data = game_question.to_dict()
    assert data['variants'] == game_question.variants()
    assert data['level'] == 0
    assert not {'a', 'b', 'c', 'd', 'question_id'} & set(data)
    assert data['help']['fifty_fifty'] == ['a', 'b']
    assert data['help']['fifty_fifty'][0] != game_question.correct_answer_key()

