"""Tests for WizardStateStore atomic updates, reset and listeners."""

import pytest

from wizard_flow import StepRegistry, StepStatus, WizardStateStore


@pytest.fixture
def store(three_steps):
    return WizardStateStore(StepRegistry(three_steps), initial_data={"account": {"email": "a@b.c"}})


def test_initial_state(store):
    assert store.current_index == 0
    assert [s.status for s in store.steps] == [StepStatus.ACTIVE, StepStatus.PENDING, StepStatus.PENDING]
    assert store.get_step_state(0).data == {"email": "a@b.c"}


def test_update_step_state_replaces_step(store):
    old_state = store.state
    old_step = store.get_step_state(1)

    new_step = store.update_step_state(1, status=StepStatus.ERROR, error="bad")

    assert new_step is not old_step
    assert new_step.status == StepStatus.ERROR
    assert new_step.error == "bad"
    # Untouched fields survive the shallow merge
    assert new_step.id == "profile"
    # Previous snapshots are never mutated
    assert old_step.status == StepStatus.PENDING
    assert old_state.steps[1].error is None


def test_set_current_index(store):
    store.set_current_index(2)
    assert store.current_index == 2

    with pytest.raises(IndexError):
        store.set_current_index(3)


def test_listeners_receive_each_new_state(store):
    received = []
    unsubscribe = store.subscribe(received.append)

    store.update_step_state(1, visited=True)
    store.set_current_index(1)

    assert [s.current_index for s in received] == [0, 1]
    assert received[0].steps[1].visited is True

    unsubscribe()
    unsubscribe()
    store.reset()
    assert len(received) == 2


def test_reset_is_idempotent(store):
    store.update_step_state(0, status=StepStatus.COMPLETED)
    store.set_current_index(1)

    store.reset()
    once = store.state
    store.reset()

    assert store.state == once
    assert store.current_index == 0
    assert store.get_step_state(0).visited is True


def test_commit_transition_notifies_once_with_full_state(store):
    received = []
    store.subscribe(received.append)

    store.commit_transition(0, 1, StepStatus.COMPLETED)

    assert len(received) == 1
    state = received[0]
    assert state.current_index == 1
    assert [s.status for s in state.steps] == [StepStatus.COMPLETED, StepStatus.ACTIVE, StepStatus.PENDING]
    assert state.steps[1].visited is True


def test_commit_transition_keeps_departing_status_when_none(store):
    store.update_step_state(0, status=StepStatus.SKIPPED)

    store.commit_transition(0, 1)

    assert store.get_step_state(0).status == StepStatus.SKIPPED
    assert store.get_step_state(1).status == StepStatus.ACTIVE
