"""Tests for task similarity."""

import pytest

from taskrank.engine.similarity import TaskSimilarity


@pytest.fixture
def similarity():
    return TaskSimilarity()


class TestTaskSimilarity:
    """Test the weighted multi-feature similarity."""

    def test_identical_tags_only(self, similarity, make_task):
        a = make_task('a', title='Alpha', tags=['api', 'docs'])
        b = make_task('b', title='Beta', tags=['API', 'docs'])
        assert similarity.similarity(a, b) == pytest.approx(0.72)

    def test_text_alone_returns_default(self, similarity, make_task):
        a = make_task('a', title='Plan QBR agenda')
        b = make_task('b', title='Plan QBR slides')
        assert similarity.similarity(a, b) == 0.3

    def test_symmetric_and_bounded(self, similarity, make_task):
        a = make_task('a', title='Alpha', category='dev', project_id='p1', energy_level=5, who_for='self')
        b = make_task('b', title='Beta', category='ops', project_id='p1', energy_level=1, who_for='Dana')
        forward = similarity.similarity(a, b)
        assert forward == pytest.approx(similarity.similarity(b, a))
        assert 0.0 <= forward <= 1.0

    def test_project_match_dominates(self, similarity, make_task):
        base = make_task('a', title='Alpha', project_id='p1', category='dev')
        same = make_task('b', title='Beta', project_id='p1', category='ops')
        other = make_task('c', title='Gamma', project_id='p2', category='dev')
        assert similarity.similarity(base, same) > similarity.similarity(base, other)

    def test_text_overlap_uses_salient_tokens(self, similarity, make_task):
        a = make_task('a', title='Prepare QBR deck')
        b = make_task('b', title='Send QBR notes')
        assert similarity.text_similarity(a, b) == 1.0

    def test_missing_fields_are_skipped(self, similarity, make_task):
        a = make_task('a', title='Alpha', category='dev')
        b = make_task('b', title='Beta', project_id='p1')
        names = [name for name, _, _ in similarity.components(a, b)]
        assert names == ['text']
