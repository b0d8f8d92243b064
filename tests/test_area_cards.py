from gridconn.gui.area_cards import AreaCardStrip


def test_cards_follow_dataset_order(qapp, regions):
    strip = AreaCardStrip()
    strip.set_regions(regions)
    assert strip.region_ids == ["hokkaido", "tokyo", "kyushu"]
    assert strip.active_region_ids() == []


def test_exactly_one_card_highlighted(qapp, regions):
    strip = AreaCardStrip()
    strip.set_regions(regions)
    strip.highlight_region("tokyo")
    strip.highlight_region("kyushu")
    strip.highlight_region("kyushu")
    assert strip.active_region_ids() == ["kyushu"]

    strip.highlight_region("atlantis")
    assert strip.active_region_ids() == []

    strip.highlight_region(None)
    assert strip.active_region_ids() == []


def test_card_click_emits_region_id(qapp, regions):
    strip = AreaCardStrip()
    strip.set_regions(regions)
    got = []
    strip.region_activated.connect(got.append)
    strip.card("tokyo").clicked.emit("tokyo")
    assert got == ["tokyo"]


def test_rebuild_keeps_highlight(qapp, regions):
    strip = AreaCardStrip()
    strip.set_regions(regions)
    strip.highlight_region("hokkaido")
    strip.set_regions(regions)
    assert strip.active_region_ids() == ["hokkaido"]
