# Path: codelist_sync/tests/unit/test_database.py
"""
Unit tests for the audit database models and RunOperations.
"""

import pytest

from codelist_sync.constants import OpStatus, SkipReason
from codelist_sync.database.models.base import (
    create_all_tables,
    get_database_type,
    get_session,
    initialize_engine,
    reset_engine,
    session_scope,
)
from codelist_sync.database.models.reconciliation_run import EntryOutcomeRecord, ReconciliationRun
from codelist_sync.database.operations.run_ops import RunOperations
from codelist_sync.process.models.outcomes import EntryOutcome, ReconciliationResult


@pytest.fixture(autouse=True)
def reset_db():
    """Reset database before and after each test."""
    reset_engine()
    yield
    reset_engine()


@pytest.fixture
def db_session():
    """Create in-memory database session for testing."""
    initialize_engine(':memory:')
    create_all_tables()
    with session_scope() as session:
        yield session


@pytest.fixture
def sample_result():
    """Result with one changed and one unchanged entry."""
    changed = EntryOutcome(
        list_uid='PDS3DEnumList_35',
        value_number=2,
        short_label='A',
        map_value=OpStatus.CREATED,
        parent_relation=OpStatus.CREATED,
        target_value=OpStatus.CREATED,
        cross_relation=OpStatus.CREATED,
        target_uid='GEN-0001',
        resolution='created',
        grouping_name='Approvals',
        skip_reason=SkipReason.NO_HIERARCHY_DATA,
    )
    unchanged = EntryOutcome(
        list_uid='PDS3DEnumList_35',
        value_number=3,
        short_label='NA',
        map_value=OpStatus.EXISTS,
        parent_relation=OpStatus.EXISTS,
        target_value=OpStatus.EXISTS,
        cross_relation=OpStatus.EXISTS,
        target_uid='T-NA',
        candidate_count=3,
        resolution='no_hierarchy+lowest_uid',
        fallback=True,
    )
    return ReconciliationResult(outcomes=[changed, unchanged])


class TestEngine:
    """Engine and session helpers."""

    def test_session_requires_engine(self):
        with pytest.raises(RuntimeError):
            get_session()

    def test_memory_database_type(self):
        initialize_engine(':memory:')

        assert get_database_type() == 'sqlite'

    def test_sqlite_file_creates_parent_dir(self, temp_dir):
        db_path = temp_dir / 'audit' / 'runs.db'

        initialize_engine(f'sqlite:///{db_path}')
        create_all_tables()

        assert db_path.parent.is_dir()


class TestRunOperations:
    """Tests for RunOperations class."""

    def test_create_run(self, db_session):
        run = RunOperations.create_run(db_session, 'ToolMap.xml', 'SPF.xml', 'lowest_uid')

        assert run.run_id is not None
        assert run.status == 'running'
        assert run.dry_run is False

    def test_record_outcomes(self, db_session, sample_result):
        run = RunOperations.create_run(db_session, 'ToolMap.xml', 'SPF.xml', 'lowest_uid')

        count = RunOperations.record_outcomes(db_session, run, sample_result.outcomes)

        assert count == 2
        records = RunOperations.find_outcomes(db_session, run.run_id)
        assert [r.value_uid for r in records] == ['PDS3DEnumList_35_2', 'PDS3DEnumList_35_3']
        assert records[0].map_value == 'created'
        assert records[0].skip_reason == 'no_hierarchy_data'
        assert records[1].fallback is True
        assert records[1].skip_reason is None
        assert records[0].grouping_name == 'Approvals'
        assert records[1].grouping_name is None

    def test_find_outcomes_by_list(self, db_session, sample_result):
        run = RunOperations.create_run(db_session, 'ToolMap.xml', 'SPF.xml', 'lowest_uid')
        RunOperations.record_outcomes(db_session, run, sample_result.outcomes)

        assert RunOperations.find_outcomes(db_session, run.run_id, list_uid='PDS3DEnumList_9') == []

    def test_finish_run(self, db_session, sample_result):
        run = RunOperations.create_run(db_session, 'ToolMap.xml', 'SPF.xml', 'lowest_uid')

        RunOperations.finish_run(
            db_session, run, sample_result,
            map_output='ToolMap_001.xml', target_output='SPF_001.xml',
        )

        found = RunOperations.find_by_id(db_session, run.run_id)
        assert found.status == 'completed'
        assert found.entry_count == 2
        assert found.changed_count == 1
        assert found.map_output == 'ToolMap_001.xml'
        assert found.finished_at is not None

    def test_finish_failed_run_without_result(self, db_session):
        run = RunOperations.create_run(db_session, None, None, 'first_found', dry_run=True)

        RunOperations.finish_run(db_session, run, None, failed=True)

        assert run.status == 'failed'
        assert run.entry_count == 0

    def test_find_by_id_missing(self, db_session):
        assert RunOperations.find_by_id(db_session, 'no-such-run') is None

    def test_outcomes_cascade(self, db_session, sample_result):
        run = RunOperations.create_run(db_session, 'ToolMap.xml', 'SPF.xml', 'lowest_uid')
        RunOperations.record_outcomes(db_session, run, sample_result.outcomes)

        db_session.delete(run)
        db_session.flush()

        assert db_session.query(ReconciliationRun).count() == 0
        assert db_session.query(EntryOutcomeRecord).count() == 0
