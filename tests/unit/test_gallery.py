"""Unit tests for renderers and gallery assembly.

Tests cover:
- Photo views with grid and lightbox references at different qualities.
- Border selection driven by film metadata.
- Featured photo, text card and three-across rendering.
- Priority loading rules.
- Fail-open rendering without a delivery-service identity.
- Unrenderable units being dropped.
"""

import logging

from portfolio.core.config import PortfolioConfig
from portfolio.core.gallery import render_gallery
from portfolio.core.image_transform import ImageTransformResolver
from portfolio.core.renderers import (
    PhotoRenderer,
    RenderContext,
    TextCardRenderer,
    ThreeAcrossRenderer,
)
from portfolio.core.unit_registry import RegistryEntry, UnitRegistry
from portfolio.core.units import (
    ContentUnit,
    LayoutClass,
    MediaRef,
    PhotoPayload,
    TextCardPayload,
    ThreeAcrossPayload,
    UnknownPayload,
)


class TestPhotoRenderer:
    def test_grid_and_lightbox_qualities(self, resolver, test_config, make_photo):
        context = RenderContext(resolver=resolver, config=test_config)
        view = PhotoRenderer().render(make_photo("p1", 1200, 800), context)

        assert "q_85" in view["image"]["url"]
        assert "q_95" in view["image"]["lightbox_url"]
        assert view["image"]["source_url"] == "https://media.example.com/p1.jpg"
        assert view["image"]["orientation"] == "horizontal"
        assert view["priority"] is False

    def test_border_from_film_metadata(self, resolver, test_config, make_photo):
        context = RenderContext(resolver=resolver, config=test_config)
        unit = make_photo(
            "p1",
            800,
            1200,
            black_and_white=True,
            apply_film_border=True,
            film_border_number=6,
        )

        view = PhotoRenderer().render(unit, context)

        assert "l_film-borders:film-borders:FILM-FRAME_OVERLAY-6-vertical-bw" in view["image"]["url"]
        assert view["image"]["has_border"] is True
        assert view["black_and_white"] is True

    def test_film_details_only_for_film_photos(self, resolver, test_config, make_photo):
        context = RenderContext(resolver=resolver, config=test_config)
        plain = PhotoRenderer().render(make_photo("p1"), context)
        film = PhotoRenderer().render(
            make_photo("p2", is_film_photo=True, film_type="6x7", film_stock="HP5 Plus"), context
        )
        assert plain["film"] is None
        assert film["film"] == {"type": "6x7", "stock": "HP5 Plus"}

    def test_wrong_payload_returns_none(self, resolver, test_config, caplog):
        context = RenderContext(resolver=resolver, config=test_config)
        unit = ContentUnit(id="x", type_tag="photo", payload=UnknownPayload(raw={}))
        with caplog.at_level(logging.WARNING):
            assert PhotoRenderer().render(unit, context) is None
        assert "cannot render unit x" in caplog.text


class TestOtherRenderers:
    def test_text_card(self, resolver, test_config, make_text):
        context = RenderContext(resolver=resolver, config=test_config)
        view = TextCardRenderer().render(make_text("t1"), context)
        assert view["content"] == {"root": {"children": []}}
        assert view["font_family"] == "inter"

    def test_three_across_renders_nested_items(self, resolver, test_config):
        photos = [
            ContentUnit(
                id=f"g{i}",
                type_tag="gridPhoto",
                payload=PhotoPayload(image=MediaRef(url=f"https://m.example.com/{i}.jpg")),
            )
            for i in range(7)
        ]
        text = ContentUnit(id="gt", type_tag="gridTextCard", payload=TextCardPayload(content="Hi"))
        row = ContentUnit(
            id="row",
            type_tag="photoBulk3Across",
            payload=ThreeAcrossPayload(items=(text, *photos)),
        )

        view = ThreeAcrossRenderer().render(row, RenderContext(resolver=resolver, config=test_config))

        assert [item["id"] for item in view["items"]] == ["gt"] + [f"g{i}" for i in range(7)]
        priorities = [item["priority"] for item in view["items"][1:]]
        # Items 1-5 fall within the first six; item index 6 onwards does not
        assert priorities == [True] * 5 + [False] * 2


class TestRenderGallery:
    def test_sections_and_stats(self, registry, resolver, test_config, make_photo, make_featured, make_text):
        units = [
            make_photo("p1", 800, 1200),
            make_photo("p2", 1200, 800),
            make_featured("f1"),
            make_photo("p3", 500, 500),
            make_text("t1"),
        ]

        layout = render_gallery(units, registry, resolver, test_config)

        assert [s["type"] for s in layout.sections] == ["grid", "break", "grid", "break"]
        assert [i["id"] for i in layout.sections[0]["items"]] == ["p1", "p2"]
        assert layout.sections[1]["type_tag"] == "featuredPhoto"
        assert layout.stats["total_grid_items"] == 3
        assert layout.to_dict()["stats"]["break_sections"] == 2

    def test_empty_gallery(self, registry, resolver, test_config):
        layout = render_gallery([], registry, resolver, test_config)
        assert layout.is_empty
        assert layout.to_dict() == {
            "sections": [],
            "stats": {
                "total_sections": 0,
                "grid_sections": 0,
                "break_sections": 0,
                "total_grid_items": 0,
            },
        }

    def test_priority_rules(self, registry, resolver, make_photo, make_featured):
        config = PortfolioConfig(_env_file=None, cloud_name="demo-cloud", grid_priority_count=2)
        units = [make_photo(f"p{i}") for i in range(3)] + [make_featured("f1"), make_photo("p9")]

        layout = render_gallery(units, registry, resolver, config)

        opening = [item["priority"] for item in layout.sections[0]["items"]]
        assert opening == [True, True, False]
        assert layout.sections[1]["item"]["priority"] is True
        assert layout.sections[2]["items"][0]["priority"] is False

    def test_unconfigured_service_serves_originals(self, registry, unconfigured_config, make_photo):
        resolver = ImageTransformResolver(unconfigured_config)
        unit = make_photo("p1", apply_film_border=True, film_border_number=2)

        layout = render_gallery([unit], registry, resolver, unconfigured_config)

        image = layout.sections[0]["items"][0]["image"]
        assert image["url"] == "https://media.example.com/p1.jpg"
        assert image["lightbox_url"] == "https://media.example.com/p1.jpg"
        assert image["has_border"] is False

    def test_bulk_units_render_as_individual_photos(self, registry, resolver, test_config, make_bulk):
        layout = render_gallery([make_bulk("b", count=3)], registry, resolver, test_config)
        assert [i["id"] for i in layout.sections[0]["items"]] == ["b-0", "b-1", "b-2"]
        assert all(i["type"] == "photo" for i in layout.sections[0]["items"])

    def test_entry_without_renderer_is_dropped(self, resolver, test_config, make_photo, caplog):
        registry = UnitRegistry()
        registry.register("photo", RegistryEntry(LayoutClass.DENSE, renderer=PhotoRenderer()))
        registry.register("divider", RegistryEntry(LayoutClass.BREAK))
        registry.freeze()

        divider = ContentUnit(id="d1", type_tag="divider", payload=UnknownPayload(raw={}))
        units = [make_photo("p1"), divider, make_photo("p2")]

        with caplog.at_level(logging.WARNING):
            layout = render_gallery(units, registry, resolver, test_config)

        # The grids on either side of the dropped break are merged
        assert len(layout.sections) == 1
        assert [i["id"] for i in layout.sections[0]["items"]] == ["p1", "p2"]
        assert "No renderer for unit type 'divider'" in caplog.text
