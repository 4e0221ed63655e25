import pytest

from tetrolab.controls import ManualPlayAction, PlayMode


def test_auto_controls():
    assert PlayMode.AUTO.controls() == (("p", "Pause"), ("q", "Quit"))


def test_manual_controls_order_and_content():
    controls = PlayMode.MANUAL.controls()
    assert [key for key, _ in controls] == [
        "Left", "Right", "Down", "Up", "z", "x", "Space", "p", "q",
    ]
    assert dict(controls)["Space"] == "Hold"
    assert dict(controls)["Up"] == "Hard drop"


def test_auto_controls_are_subset_of_manual():
    assert set(PlayMode.AUTO.controls()) <= set(PlayMode.MANUAL.controls())


@pytest.mark.parametrize(
    "key, action",
    [
        ("Left", ManualPlayAction.MOVE_LEFT),
        ("Right", ManualPlayAction.MOVE_RIGHT),
        ("Down", ManualPlayAction.SOFT_DROP),
        ("Up", ManualPlayAction.HARD_DROP),
        ("z", ManualPlayAction.ROTATE_LEFT),
        ("x", ManualPlayAction.ROTATE_RIGHT),
        (" ", ManualPlayAction.HOLD),
        ("p", ManualPlayAction.PAUSE),
        ("q", ManualPlayAction.QUIT),
    ],
)
def test_from_key(key, action):
    assert ManualPlayAction.from_key(key) is action


@pytest.mark.parametrize("key", ["Z", "a", "Esc", "", "Enter"])
def test_unbound_keys(key):
    assert ManualPlayAction.from_key(key) is None


def test_every_action_has_a_key():
    bound = {ManualPlayAction.from_key(k) for k in ["Left", "Right", "Down", "Up", "z", "x", " ", "p", "q"]}
    assert bound == set(ManualPlayAction)