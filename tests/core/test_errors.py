"""Tests for parabond.core.errors module."""

import pytest

from parabond.core.errors import (
    CorruptDeck,
    EmptyPortfolio,
    ErrorCategory,
    ErrorContext,
    InvalidPartition,
    MalformedDocument,
    NonPositivePrice,
    NotFound,
    ParabondError,
    TransportFailure,
)


class TestErrorContext:
    """Test ErrorContext dataclass."""

    def test_empty_context(self):
        ctx = ErrorContext()
        assert ctx.portf_id is None
        assert ctx.to_dict() == {}

    def test_to_dict_skips_unset_fields(self):
        ctx = ErrorContext(portf_id=7, node="fine-grained")
        assert ctx.to_dict() == {"portf_id": 7, "node": "fine-grained"}

    def test_metadata_merged(self):
        ctx = ErrorContext(bond_id=3, metadata={"attempt": 1})
        assert ctx.to_dict() == {"bond_id": 3, "attempt": 1}


class TestParabondError:
    """Test the base exception."""

    def test_default_category(self):
        assert ParabondError("x").category == ErrorCategory.INTERNAL

    def test_with_context_sets_known_and_extra_fields(self):
        error = NotFound("missing").with_context(portf_id=4, collection="Portfolios")
        assert error.context.portf_id == 4
        assert error.context.metadata == {"collection": "Portfolios"}

    def test_cause_is_chained(self):
        cause = ConnectionError("refused")
        error = TransportFailure("store down", cause=cause)
        assert error.__cause__ is cause
        assert error.to_dict()["cause"] == "refused"

    def test_to_dict(self):
        error = EmptyPortfolio("no bonds").with_context(portf_id=9)
        d = error.to_dict()
        assert d["error_type"] == "EmptyPortfolio"
        assert d["category"] == "SOURCE"
        assert d["context"] == {"portf_id": 9}

    def test_repr(self):
        assert repr(CorruptDeck("bad")) == "CorruptDeck('bad', category=INTERNAL)"


class TestTaxonomy:
    @pytest.mark.parametrize(
        "cls, category",
        [
            (InvalidPartition, ErrorCategory.VALIDATION),
            (CorruptDeck, ErrorCategory.INTERNAL),
            (EmptyPortfolio, ErrorCategory.SOURCE),
            (NotFound, ErrorCategory.SOURCE),
            (NonPositivePrice, ErrorCategory.VALIDATION),
            (TransportFailure, ErrorCategory.NETWORK),
            (MalformedDocument, ErrorCategory.SOURCE),
        ],
    )
    def test_categories(self, cls, category):
        error = cls("boom")
        assert isinstance(error, ParabondError)
        assert error.category == category
