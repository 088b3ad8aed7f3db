from cubed.model import ANIM_FRAMES, AnimationState, Player, Vector


def test_vector_add_sub_round_trip():
    a = Vector(1.5, -2.0)
    b = Vector(0.25, 3.0)
    assert (a + b) - b == a


def test_vector_negation_cancels():
    a = Vector(3.0, -7.0)
    assert a + (-a) == Vector(0.0, 0.0)


def test_vector_scaling_matches_addition():
    a = Vector(0.5, 1.25)
    assert a * 2 == a + a
    assert 2 * a == a * 2


def test_player_position_is_mutable():
    player = Player(Vector(1.5, 1.5), Vector(0.0, -1.0), Vector(2 / 3, 0.0))
    start = player.position
    player.position = player.position + player.direction
    assert player.position == start + Vector(0.0, -1.0)


def test_animation_waits_one_tick_before_advancing():
    anim = AnimationState()
    assert anim.tick() == 0
    assert anim.last_update == 1
    assert anim.tick() == 1
    assert anim.last_update == 0


def test_animation_cycles_through_all_frames():
    anim = AnimationState()
    seen = [anim.tick() for _ in range(2 * ANIM_FRAMES)]
    assert set(seen) == set(range(ANIM_FRAMES))
    assert anim.frame == 0