# tests/test_lifecycle.py
from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest

from ticketdesk.core.enums import TicketStatus
from ticketdesk.ticket import lifecycle

T0 = datetime(2026, 3, 10, 9, 0, 0)


def _ticket(status="novo", completed_at=None):
    return SimpleNamespace(status=status, completed_at=completed_at)


def test_due_date_adds_sla_hours():
    assert lifecycle.due_date_for(T0, 24) == T0 + timedelta(hours=24)
    assert lifecycle.due_date_for(T0, 8) == datetime(2026, 3, 10, 17, 0, 0)


@pytest.mark.parametrize("status", [TicketStatus.RESOLVED, TicketStatus.CLOSED])
def test_entering_done_sets_completed_at(status):
    ticket = _ticket("em andamento")
    assert lifecycle.apply_status(ticket, status, T0) is True
    assert ticket.status == status.value
    assert ticket.completed_at == T0


def test_leaving_done_clears_completed_at():
    ticket = _ticket("resolvido", completed_at=T0)
    lifecycle.apply_status(ticket, "pendente", T0 + timedelta(hours=1))
    assert ticket.status == "pendente"
    assert ticket.completed_at is None


def test_same_done_status_keeps_first_completion():
    ticket = _ticket("resolvido", completed_at=T0)
    changed = lifecycle.apply_status(ticket, "resolvido", T0 + timedelta(hours=5))
    assert changed is False
    assert ticket.completed_at == T0


def test_resolved_to_closed_restamps():
    ticket = _ticket("resolvido", completed_at=T0)
    later = T0 + timedelta(hours=2)
    lifecycle.apply_status(ticket, "fechado", later)
    assert ticket.completed_at == later


def test_completion_tracks_every_transition():
    for start in TicketStatus:
        for target in TicketStatus:
            ticket = _ticket(start.value, T0 if start in lifecycle.DONE_STATUSES else None)
            lifecycle.apply_status(ticket, target, T0)
            assert (ticket.completed_at is not None) == lifecycle.is_done(ticket.status)


def test_close_is_idempotent_and_restamps():
    ticket = _ticket("fechado", completed_at=T0)
    later = T0 + timedelta(days=1)
    lifecycle.close(ticket, later)
    assert ticket.status == "fechado"
    assert ticket.completed_at == later


def test_reopen_goes_to_open_and_clears():
    ticket = _ticket("fechado", completed_at=T0)
    lifecycle.reopen(ticket, T0)
    assert ticket.status == "aberto"
    assert ticket.completed_at is None


def test_can_reopen_only_done():
    reopenable = {s for s in TicketStatus if lifecycle.can_reopen(s)}
    assert reopenable == {TicketStatus.RESOLVED, TicketStatus.CLOSED}


def test_private_comments_hidden_from_plain_users():
    comments = [
        SimpleNamespace(id=1, is_private=False),
        SimpleNamespace(id=2, is_private=True),
    ]
    assert [c.id for c in lifecycle.visible_comments(comments, "user")] == [1]
    assert [c.id for c in lifecycle.visible_comments(comments, "support")] == [1, 2]
    assert [c.id for c in lifecycle.visible_comments(comments, "admin")] == [1, 2]
