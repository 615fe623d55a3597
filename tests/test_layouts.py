from config import LAYOUTS
from scenarios.layouts import BlockLayout, CorridorLayout, EmptyLayout, EnclosureLayout, create_layout


def test_every_named_layout_resolves():
    for name, layout_config in LAYOUTS.items():
        layout = create_layout(name)
        if layout_config['type'] == 'random':
            assert layout is None
        else:
            obstacles = layout.build(800, 500)
            for obstacle in obstacles:
                left, top, right, bottom = obstacle.bounds()
                assert left >= 0 and top >= 0 and right <= 800 and bottom <= 500


def test_unknown_layout_is_none():
    assert create_layout('Nowhere') is None


def test_layout_types():
    assert isinstance(create_layout('Empty'), EmptyLayout)
    assert isinstance(create_layout('Central Block'), BlockLayout)
    assert isinstance(create_layout('Enclosed Goal'), EnclosureLayout)
    assert isinstance(create_layout('Corridor'), CorridorLayout)


def test_block_defaults_to_canvas_center():
    (block,) = BlockLayout((60, 120)).build(800, 500)
    assert block.center() == (400, 250)


def test_enclosure_walls_overlap_at_corners():
    walls = EnclosureLayout((650, 250), (100, 120), 20).build(800, 500)
    assert len(walls) == 4
    left = min(w.x for w in walls)
    right = max(w.x + w.width for w in walls)
    assert (left, right) == (580, 720)


def test_corridor_leaves_gap():
    upper, lower = CorridorLayout(70, 30).build(800, 500)
    assert lower.y - (upper.y + upper.height) == 70
