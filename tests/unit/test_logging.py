"""
Unit tests for contextual logging.
"""

import logging
import time

import pytest

from mdb_mapper.observability import (get_correlation_id, get_logger,
                                      get_logging_context, log_operation,
                                      repository_context, set_correlation_id)


class TestLoggingContext:
    """Test correlation IDs and repository context."""

    def test_correlation_id(self):
        """Test setting and generating correlation IDs."""
        assert set_correlation_id("abc") == "abc"
        assert get_correlation_id() == "abc"
        assert get_logging_context() == {"correlation_id": "abc"}

        generated = set_correlation_id()
        assert generated and generated != "abc"

    def test_repository_context_is_scoped(self):
        """Test that repository context only exists inside the block."""
        with repository_context("db.people", document_id="1", unused=None) as context:
            assert context == {"collection": "db.people", "document_id": "1"}
            assert get_logging_context() == context
        assert get_logging_context() == {}

    def test_nested_contexts_restore_outer(self):
        """Test that leaving an inner context restores the outer one."""
        with repository_context("db.people", document_id="1"):
            with repository_context("db.orders"):
                assert get_logging_context() == {"collection": "db.orders"}
            assert get_logging_context()["document_id"] == "1"

    def test_context_restored_when_block_raises(self):
        """Test that the context is reset on errors."""
        with pytest.raises(RuntimeError):
            with repository_context("db.people", document_id="1"):
                raise RuntimeError("boom")
        assert get_logging_context() == {}


class TestLogOperation:
    """Test structured operation logging."""

    def test_log_operation(self, caplog):
        """Test that operations name their document and carry their context."""
        logger = get_logger("mdb_mapper.tests")
        set_correlation_id("abc")

        with caplog.at_level(logging.INFO, logger="mdb_mapper.tests"):
            with repository_context("db.people", document_id="42"):
                log_operation(logger, "repository.upsert", started=time.perf_counter(), merge=True)

        record = caplog.records[-1]
        assert record.getMessage().startswith("repository.upsert db.people/42 (")
        assert record.operation == "repository.upsert"
        assert record.success is True
        assert record.duration_ms >= 0
        assert record.merge is True
        assert record.collection == "db.people"
        assert record.correlation_id == "abc"

    def test_failed_operation(self, caplog):
        """Test the message of a failed operation outside any context."""
        logger = logging.getLogger("mdb_mapper.tests")
        with caplog.at_level(logging.WARNING, logger="mdb_mapper.tests"):
            log_operation(logger, "repository.delete", level=logging.WARNING, success=False)

        record = caplog.records[-1]
        assert record.getMessage() == "repository.delete failed"
        assert not hasattr(record, "duration_ms")

    def test_adapter_adds_context(self, caplog):
        """Test that contextual loggers attach the current context."""
        logger = get_logger("mdb_mapper.tests")
        with caplog.at_level(logging.DEBUG, logger="mdb_mapper.tests"):
            with repository_context("db.people", document_id="7"):
                logger.debug("inside", extra={"step": 1})
            logger.debug("outside")

        inside, outside = caplog.records[-2:]
        assert inside.document_id == "7"
        assert inside.step == 1
        assert not hasattr(outside, "document_id")

    @pytest.mark.asyncio
    async def test_repository_upsert_is_logged(self, caplog, person_repository, alice):
        """Test that repository writes emit an operation record."""
        with caplog.at_level(logging.INFO, logger="mdb_mapper.repositories.base"):
            id = await person_repository.upsert(alice)

        records = [r for r in caplog.records if getattr(r, "operation", None) == "repository.upsert"]
        assert len(records) == 1
        assert records[0].collection == "test.people"
        assert records[0].document_id == id
        assert records[0].entity_type == "Person"
        assert records[0].getMessage().startswith(f"repository.upsert test.people/{id}")
