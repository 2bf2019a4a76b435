from pulsemap.services.surface.layers import DC_LAYERS, STORE_LAYERS
from pulsemap.services.view.lod import LodController, LodMode, layer_visibility, resolve_lod


def test_threshold_is_inclusive():
    assert resolve_lod(6.0, "ALL", 6.0) is LodMode.STORES
    assert resolve_lod(5.99, "ALL", 6.0) is LodMode.DC_ROLLUP


def test_selected_dc_pins_store_layer_when_zooming_out():
    controller = LodController(threshold=6.0, zoom=8.0)
    controller.on_filter("ATL")

    mode, changed = controller.on_zoom(3.0)

    assert mode is LodMode.STORES
    assert changed is False


def test_clearing_dc_at_low_zoom_returns_to_rollups():
    controller = LodController(threshold=6.0, zoom=3.3, dc="ATL")
    assert controller.mode is LodMode.STORES

    mode, changed = controller.on_filter("ALL")

    assert mode is LodMode.DC_ROLLUP
    assert changed is True


def test_repeated_zoom_is_a_no_op():
    controller = LodController(threshold=6.0, zoom=3.0)

    assert controller.on_zoom(7.0) == (LodMode.STORES, True)
    assert controller.on_zoom(7.5) == (LodMode.STORES, False)


def test_layer_visibility_is_exclusive():
    visibility = layer_visibility(LodMode.STORES)

    assert all(visibility[layer] == "visible" for layer in STORE_LAYERS)
    assert all(visibility[layer] == "none" for layer in DC_LAYERS)
    assert layer_visibility(LodMode.DC_ROLLUP)[STORE_LAYERS[0]] == "none"
