# test_jumpstart.py
import pytest

from app import jumpstart
from app.errors import AuthorizationError, NotFoundError, StateError, ValidationError
from app.jumpstart_prompts import JUMPSTART_MODES, get_mode
from app.models import Asset, JumpstartPrompt


@pytest.fixture
def assets(db, user, home):
    return db.query(Asset).filter(Asset.user_id == user.id).order_by(Asset.id).all()


def test_modes_target_equals_prompt_count():
    assert {m.id: m.items for m in JUMPSTART_MODES} == {"quick-win": 3, "high-value": 5, "room-blitz": 15}
    with pytest.raises(ValidationError):
        get_mode("speed-run")

def test_start_creates_session_and_prompt_rows(db, user):
    session = jumpstart.start_session(db, user, "high-value")
    assert session.items_target == 5
    assert session.items_completed == 0
    assert session.total_value == 0
    assert [p.prompt_index for p in session.prompts] == [0, 1, 2, 3, 4]
    assert [p.prompt_id for p in session.prompts] == [p.id for p in get_mode("high-value").prompts]
    assert jumpstart.current_prompt_index(session) == 0

def test_start_requires_user(db):
    with pytest.raises(AuthorizationError):
        jumpstart.start_session(db, None, "quick-win")

def test_quick_win_three_completions(db, user, assets):
    session = jumpstart.start_session(db, user, "quick-win")
    for value in (1500.0, 900.0, 2500.0):
        session = jumpstart.complete_prompt(db, user, session.id, assets[0].id, value)

    assert session.items_completed == 3
    assert session.total_value == pytest.approx(4900.0)
    assert jumpstart.current_prompt_index(session) == 3
    assert jumpstart.is_complete(session)
    assert jumpstart.progress(session) == 100

    done = jumpstart.complete_session(db, user, session.id)
    assert done.completed is True
    assert done.completed_at is not None
    assert jumpstart.resume_active_session(db, user) is None

def test_skipping_everything_leaves_counters_alone(db, user):
    session = jumpstart.start_session(db, user, "high-value")
    for _ in range(5):
        session = jumpstart.skip_prompt(db, user, session.id)
    assert jumpstart.current_prompt_index(session) == 5
    assert session.items_completed == 0
    assert session.total_value == 0
    assert jumpstart.progress(session) == 0
    assert all(p.skipped and not p.completed for p in session.prompts)

def test_resume_points_at_first_pending_prompt(db, user, assets):
    session = jumpstart.start_session(db, user, "high-value")
    jumpstart.complete_prompt(db, user, session.id, assets[1].id, 300.0)
    jumpstart.skip_prompt(db, user, session.id)
    # a later prompt resolved out of band (another tab) must not move the cursor past index 2
    row = db.query(JumpstartPrompt).filter_by(session_id=session.id, prompt_index=3).one()
    row.skipped = True
    db.commit()

    resumed = jumpstart.resume_active_session(db, user)
    assert resumed.id == session.id
    states = [(p.completed, p.skipped) for p in resumed.prompts]
    assert states[:3] == [(True, False), (False, True), (False, False)]
    assert jumpstart.current_prompt_index(resumed) == 2

def test_resume_picks_latest_open_session(db, user):
    older = jumpstart.start_session(db, user, "quick-win")
    newer = jumpstart.start_session(db, user, "room-blitz")
    assert jumpstart.resume_active_session(db, user).id == newer.id
    jumpstart.skip_session(db, user, newer.id)
    assert jumpstart.resume_active_session(db, user).id == older.id

def test_progress_rounds(db, user, assets):
    session = jumpstart.start_session(db, user, "quick-win")
    session = jumpstart.complete_prompt(db, user, session.id, assets[0].id, 10.0)
    assert jumpstart.progress(session) == 33
    session = jumpstart.complete_prompt(db, user, session.id, assets[0].id, 10.0)
    assert jumpstart.progress(session) == 67

def test_no_current_prompt_after_all_resolved(db, user, assets):
    session = jumpstart.start_session(db, user, "quick-win")
    for _ in range(3):
        jumpstart.skip_prompt(db, user, session.id)
    with pytest.raises(StateError):
        jumpstart.skip_prompt(db, user, session.id)
    with pytest.raises(StateError):
        jumpstart.complete_prompt(db, user, session.id, assets[0].id, 5.0)

def test_complete_session_requires_resolved_prompts(db, user):
    session = jumpstart.start_session(db, user, "quick-win")
    with pytest.raises(StateError):
        jumpstart.complete_session(db, user, session.id)

def test_complete_session_twice_is_noop(db, user):
    session = jumpstart.start_session(db, user, "quick-win")
    for _ in range(3):
        jumpstart.skip_prompt(db, user, session.id)
    first = jumpstart.complete_session(db, user, session.id)
    stamp = first.completed_at
    second = jumpstart.complete_session(db, user, session.id)
    assert second.completed_at == stamp

def test_completed_session_rejects_changes(db, user):
    session = jumpstart.start_session(db, user, "quick-win")
    jumpstart.skip_session(db, user, session.id)
    with pytest.raises(StateError):
        jumpstart.skip_prompt(db, user, session.id)

def test_negative_value_and_foreign_asset(db, user, other_user, assets):
    session = jumpstart.start_session(db, user, "quick-win")
    with pytest.raises(ValidationError):
        jumpstart.complete_prompt(db, user, session.id, assets[0].id, -1)
    foreign = Asset(user_id=other_user.id, title="Bike", estimated_value=400.0)
    db.add(foreign); db.commit()
    with pytest.raises(NotFoundError):
        jumpstart.complete_prompt(db, user, session.id, foreign.id, 400.0)
    session = jumpstart.get_session(db, user, session.id)
    assert session.items_completed == 0
    assert jumpstart.current_prompt_index(session) == 0

def test_sessions_are_private(db, user, other_user):
    session = jumpstart.start_session(db, user, "quick-win")
    with pytest.raises(NotFoundError):
        jumpstart.skip_prompt(db, other_user, session.id)
    assert jumpstart.resume_active_session(db, other_user) is None

@pytest.mark.parametrize("value", [float("nan"), float("inf")])
def test_non_finite_value_rejected(db, user, assets, value):
    session = jumpstart.start_session(db, user, "quick-win")
    with pytest.raises(ValidationError):
        jumpstart.complete_prompt(db, user, session.id, assets[0].id, value)
    db.expire_all()
    session = jumpstart.get_session(db, user, session.id)
    assert session.items_completed == 0
    assert session.total_value == 0
    assert jumpstart.current_prompt_index(session) == 0

def test_prompt_resolved_in_another_tab_is_a_conflict(db, session_factory, user, assets):
    session = jumpstart.start_session(db, user, "quick-win")
    assert jumpstart.current_prompt_index(session) == 0     # prompts loaded in this session

    other = session_factory()
    try:
        jumpstart.skip_prompt(other, user, session.id)
    finally:
        other.close()

    with pytest.raises(StateError):
        jumpstart.complete_prompt(db, user, session.id, assets[0].id, 750.0)

    db.expire_all()
    fresh = jumpstart.get_session(db, user, session.id)
    assert fresh.items_completed == 0
    assert fresh.total_value == 0
    assert fresh.prompts[0].skipped is True
    assert fresh.prompts[0].completed is False
    assert fresh.prompts[0].asset_id is None
    assert jumpstart.current_prompt_index(fresh) == 1
