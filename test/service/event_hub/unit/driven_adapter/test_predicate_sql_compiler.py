"""
The SQL side of EventPredicate: compile statements with the PostgreSQL
dialect and inspect the rendered SQL and bound parameters.
"""

from datetime import datetime

import pytest
from sqlalchemy.dialects import postgresql

from src.service.event_hub.domain.enum.event_state import EventState
from src.service.event_hub.domain.value_object.event_predicate import (
    MATCH_ALL,
    ContainsText,
    Equals,
    EventField,
    EventPredicate,
    HasFreeSeats,
    InRange,
    InSet,
)
from src.service.event_hub.domain.value_object.page_request import PageRequest
from src.service.event_hub.driven_adapter.repo.event_query_repo_impl import build_query_statement
from src.service.event_hub.driven_adapter.repo.predicate_sql_compiler import (
    compile_clause,
    compile_predicate,
)


def _compile(predicate: EventPredicate, **kwargs):
    page = kwargs.pop('page', PageRequest())
    stmt = build_query_statement(predicate=predicate, page=page, **kwargs)
    return stmt.compile(dialect=postgresql.dialect())


@pytest.mark.unit
class TestCompileClause:
    def test_in_set_uses_in(self) -> None:
        compiled = compile_clause(InSet(EventField.CATEGORY_ID, (2, 1))).compile(
            dialect=postgresql.dialect()
        )

        assert 'events.category_id IN' in str(compiled)
        assert [1, 2] in compiled.params.values()

    def test_enum_values_are_bound_as_strings(self) -> None:
        compiled = compile_clause(Equals(EventField.STATE, EventState.PUBLISHED)).compile(
            dialect=postgresql.dialect()
        )

        assert 'events.state = ' in str(compiled)
        assert 'PUBLISHED' in compiled.params.values()

    def test_range_renders_only_given_bounds(self) -> None:
        start = datetime(2030, 1, 1)
        sql = str(
            compile_clause(InRange(EventField.EVENT_DATE, lower=start)).compile(
                dialect=postgresql.dialect()
            )
        )

        assert 'events.event_date >=' in sql
        assert 'events.event_date <=' not in sql

    def test_contains_text_is_case_insensitive_or(self) -> None:
        sql = str(
            compile_clause(
                ContainsText((EventField.ANNOTATION, EventField.DESCRIPTION), 'Jazz')
            ).compile(dialect=postgresql.dialect())
        )

        assert 'lower(events.annotation) LIKE' in sql
        assert 'lower(events.description) LIKE' in sql
        assert ' OR ' in sql

    def test_has_free_seats(self) -> None:
        sql = str(compile_clause(HasFreeSeats()).compile(dialect=postgresql.dialect()))

        assert 'events.participant_limit = ' in sql
        assert 'events.confirmed_requests < events.participant_limit' in sql


@pytest.mark.unit
class TestBuildQueryStatement:
    def test_match_all_has_no_where(self) -> None:
        assert compile_predicate(MATCH_ALL) is None
        assert 'WHERE' not in str(_compile(MATCH_ALL))

    def test_clauses_are_anded(self) -> None:
        predicate = MATCH_ALL.and_(Equals(EventField.PAID, True)).and_(HasFreeSeats())

        sql = str(_compile(predicate))

        assert 'WHERE events.paid = ' in sql
        assert ' AND ' in sql

    def test_default_order_is_id(self) -> None:
        assert 'ORDER BY events.id' in str(_compile(MATCH_ALL))

    def test_event_date_order_breaks_ties_by_id(self) -> None:
        sql = str(_compile(MATCH_ALL, order_by=EventField.EVENT_DATE))

        assert 'ORDER BY events.event_date, events.id' in sql

    def test_page_window(self) -> None:
        compiled = _compile(MATCH_ALL, page=PageRequest(from_=25, size=10))

        assert 'LIMIT' in str(compiled)
        assert 'OFFSET' in str(compiled)
        assert 20 in compiled.params.values()
        assert 10 in compiled.params.values()
