import pytest

from meshscene.viewport import Rect, Viewport, ViewScreenLocation


def _all_quadrants(width, height):
    views = {loc: Viewport(loc) for loc in ViewScreenLocation}
    for view in views.values():
        view.resize_to_screen(width, height)
    return {loc: view.viewport for loc, view in views.items()}


def test_quadrants_tile_the_screen():
    width, height = 800, 600
    q = _all_quadrants(width, height)
    tl, tr = q[ViewScreenLocation.TOP_LEFT], q[ViewScreenLocation.TOP_RIGHT]
    bl, br = q[ViewScreenLocation.BOTTOM_LEFT], q[ViewScreenLocation.BOTTOM_RIGHT]
    assert (tl.top_left_x, tl.top_left_y) == (0.0, 0.0)
    assert tr.top_left_x == tl.width
    assert bl.top_left_y == tl.height
    assert br.top_left_x + br.width == pytest.approx(width)
    assert br.top_left_y + br.height == pytest.approx(height)


def test_quadrants_share_size_and_depth_range():
    q = _all_quadrants(1024, 768)
    sizes = {(vp.width, vp.height) for vp in q.values()}
    assert len(sizes) == 1
    assert all((vp.min_depth, vp.max_depth) == (0.0, 1.0) for vp in q.values())


def test_unplaced_viewport_only_gets_depth_range():
    view = Viewport()
    view.resize_to_screen(800, 600)
    assert (view.viewport.width, view.viewport.height) == (0.0, 0.0)
    assert view.viewport.max_depth == 1.0


def test_resize_to_rect_copies_rect():
    view = Viewport(ViewScreenLocation.BOTTOM_LEFT)
    rect = Rect(10.0, 20.0, 300.0, 400.0)
    view.resize_to_rect(rect)
    vp = view.viewport
    assert (vp.top_left_x, vp.top_left_y, vp.width, vp.height) == (10.0, 20.0, 300.0, 400.0)


@pytest.fixture
def splits():
    return {
        "top": Rect(1.0, 2.0, 3.0, 4.0),
        "bottom": Rect(5.0, 6.0, 7.0, 8.0),
        "left": Rect(9.0, 10.0, 11.0, 12.0),
        "right": Rect(13.0, 14.0, 15.0, 16.0),
    }


@pytest.mark.parametrize(
    "location,horizontal,vertical",
    [
        (ViewScreenLocation.TOP_LEFT, "left", "top"),
        (ViewScreenLocation.TOP_RIGHT, "right", "top"),
        (ViewScreenLocation.BOTTOM_LEFT, "left", "bottom"),
        (ViewScreenLocation.BOTTOM_RIGHT, "right", "bottom"),
    ],
)
def test_resize_to_splits_picks_bordering_rects(splits, location, horizontal, vertical):
    view = Viewport(location)
    view.resize_to_splits(splits["top"], splits["bottom"], splits["left"], splits["right"])
    vp = view.viewport
    assert vp.top_left_x == splits[horizontal].left_top_x
    assert vp.width == splits[horizontal].width
    assert vp.top_left_y == splits[vertical].left_top_y
    assert vp.height == splits[vertical].height


def test_resize_to_splits_without_location_does_nothing(splits):
    view = Viewport()
    view.resize_to_splits(splits["top"], splits["bottom"], splits["left"], splits["right"])
    assert view.viewport.width == 0.0