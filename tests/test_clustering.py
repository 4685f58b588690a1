"""Tests for k-medoids task batching."""

import pytest

from taskrank.engine.clustering import KMedoidsClusterer
from taskrank.models.scores import TaskBatch, TaskCluster


@pytest.fixture
def clusterer():
    return KMedoidsClusterer()


@pytest.fixture
def two_projects(make_task):
    titles = ['Alpha', 'Beta', 'Gamma', 'Delta', 'Epsilon', 'Zeta']
    tasks = []
    for i, title in enumerate(titles):
        if i < 3:
            tasks.append(make_task(f"a{i}", title=title, project_id='apollo', category='dev'))
        else:
            tasks.append(make_task(f"b{i}", title=title, project_id='billing', category='finance'))
    return tasks


class TestKMedoids:
    """Test greedy k-medoids clustering."""

    def test_small_sets_become_singletons(self, clusterer, make_task):
        tasks = [make_task('a'), make_task('b')]
        clusters = clusterer.cluster(tasks, max_clusters=7)
        assert [c.tasks for c in clusters] == [[tasks[0]], [tasks[1]]]
        assert all(c.cohesion == 1.0 for c in clusters)

    def test_groups_by_project(self, clusterer, two_projects):
        clusters = clusterer.cluster(two_projects, max_clusters=2)
        assert len(clusters) == 2
        assert {c.name for c in clusters} == {'Project: apollo', 'Project: billing'}
        for cluster in clusters:
            assert len({t.project_id for t in cluster.tasks}) == 1
            assert len(cluster.tasks) == 3
            assert cluster.cohesion == pytest.approx(5.3 / 6)

    def test_every_task_assigned_once(self, clusterer, two_projects):
        clusters = clusterer.cluster(two_projects, max_clusters=3)
        assigned = [t.task_id for c in clusters for t in c.tasks]
        assert sorted(assigned) == sorted(t.task_id for t in two_projects)

    def test_sorted_by_cohesion_times_size(self, clusterer, two_projects):
        clusters = clusterer.cluster(two_projects, max_clusters=4)
        keys = [c.cohesion * len(c.tasks) for c in clusters]
        assert keys == sorted(keys, reverse=True)

    def test_invalid_cluster_count(self, clusterer, make_task):
        with pytest.raises(ValueError):
            clusterer.cluster([make_task('a')], max_clusters=0)

    def test_duplicate_ids_rejected(self, clusterer, make_task):
        with pytest.raises(ValueError):
            clusterer.cluster([make_task('a'), make_task('a')], max_clusters=1)

    def test_empty(self, clusterer):
        assert clusterer.cluster([], max_clusters=3) == []


class TestClusterNaming:
    """Test cluster names and batch types."""

    def test_context_name_has_single_at(self, make_task):
        with_at = TaskCluster(medoid=make_task('a', contexts=['@office']), tasks=[], cohesion=1.0)
        without_at = TaskCluster(medoid=make_task('b', contexts=['office']), tasks=[], cohesion=1.0)
        assert with_at.name == '@office'
        assert without_at.name == '@office'
        assert with_at.batch_type == 'Context'

    def test_name_precedence(self, make_task):
        medoid = make_task('a', project_id='p1', category='dev', who_for='Dana')
        cluster = TaskCluster(medoid=medoid, tasks=[medoid], cohesion=1.0)
        assert cluster.name == 'Project: p1'
        assert cluster.batch_type == 'Project'

    def test_stakeholder_and_general(self, make_task):
        assert TaskCluster(make_task('a', who_for='Dana'), [], 1.0).name == 'For: Dana'
        assert TaskCluster(make_task('b', tags=['x']), [], 1.0).batch_type == 'Tag'
        assert TaskCluster(make_task('c'), [], 1.0).name == 'General'

    def test_batch_from_cluster(self, make_task):
        medoid = make_task('a', category='review')
        batch = TaskBatch.from_cluster(TaskCluster(medoid, [medoid], 0.8))
        assert batch.to_dict() == {
            'name': 'review',
            'batch_type': 'Category',
            'task_ids': ['a'],
            'cohesion': 0.8,
        }
