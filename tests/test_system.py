"""Tests for the intent system: IDs, insertion order, create and remove."""

from types import SimpleNamespace

import pytest
from textual.widgets import Button, Static

from intentboard.errors import InsertionError, SetupError
from intentboard.intent import Intent, IntentBody
from intentboard.modal import ModalMode
from intentboard.system import IntentSystem

from conftest import GREETING, click, fill_fields


async def test_ids_increase_and_are_never_reused(make_app):
    """Test that IDs count up from zero and skip removed ones."""
    async with make_app().run_test() as pilot:
        system = pilot.app.system

        first = system.create(GREETING)
        second = system.create(GREETING)
        third = system.create(GREETING)
        await pilot.pause()
        await system.remove(second.ID)
        fourth = system.create(GREETING)

        assert [first.ID, second.ID, third.ID, fourth.ID] == [0, 1, 2, 3]
        assert sorted(system.intents) == [0, 2, 3]


async def test_ids_are_per_system(make_app):
    """Test that separate systems number their intents independently."""
    for _ in range(2):
        async with make_app().run_test() as pilot:
            intent = pilot.app.system.create(GREETING)

            assert intent.ID == 0


async def test_add_inserts_before_anchor(make_app):
    """Test that new cards appear last, just before the anchor."""
    async with make_app().run_test() as pilot:
        system = pilot.app.system

        first = Intent(GREETING, system)
        second = Intent({**GREETING, "title": "Farewell"}, system)
        await system.add(first)
        await system.add(second)

        assert list(system.container.children) == [
            first.dom.card,
            second.dom.card,
            system.anchor,
        ]
        assert system.get(first.ID) is first
        assert list(system) == [first, second]


async def test_add_without_id_fails(make_app):
    """Test that objects without an ID cannot be inserted."""
    async with make_app().run_test() as pilot:
        system = pilot.app.system

        with pytest.raises(InsertionError, match="Insertion failed"):
            system.add(SimpleNamespace(dom=None))

        with pytest.raises(InsertionError):
            system.add(SimpleNamespace(ID=None, dom=None))

        assert len(system) == 0


async def test_remove_detaches_card(make_app):
    """Test that remove drops the mapping entry and the card."""
    async with make_app().run_test() as pilot:
        system = pilot.app.system
        intent = system.create(GREETING)
        await pilot.pause()

        await system.remove(intent.ID)

        assert intent.ID not in system
        assert system.get(intent.ID) is None
        assert list(system.container.children) == [system.anchor]


async def test_remove_unknown_id(make_app):
    """Test that removing an unknown ID raises KeyError."""
    async with make_app().run_test() as pilot:
        with pytest.raises(KeyError):
            pilot.app.system.remove(42)


async def test_clear_removes_everything(make_app):
    """Test that clear empties the system."""
    async with make_app().run_test() as pilot:
        system = pilot.app.system
        intents = [system.create(GREETING) for _ in range(3)]
        await pilot.pause()

        system.clear()
        await pilot.pause()

        assert len(system) == 0
        assert all(intent.refresh_timer is None for intent in intents)


async def test_new_intent_opens_create_mode(make_app):
    """Test that the new intent button opens an empty create modal."""
    async with make_app().run_test() as pilot:
        system = pilot.app.system

        click(system.new_intent_button)

        assert system.modal.mode is ModalMode.CREATE
        assert system.modal.submit is system.modal.actions["create"]
        assert all(value == "" for value in system.modal.data.values())


async def test_create_flow(make_app):
    """Test creating an intent through the modal."""
    async with make_app().run_test() as pilot:
        system = pilot.app.system
        modal = system.modal

        click(system.new_intent_button)
        fill_fields(modal, title="Greeting", expressions="hi\nhello", answer="Hello!")
        await pilot.pause()
        click(modal.submit)
        await pilot.pause()

        assert len(system) == 1
        (intent,) = system
        assert intent.body == IntentBody("Greeting", ["hi", "hello"], "Hello!")
        assert intent.dom.card in system.container.children
        assert modal.mode is ModalMode.CLOSED
        assert len(modal.actions["create"].listeners) == 0


async def test_create_requires_submittable(make_app):
    """Test that submitting with an empty field creates nothing."""
    async with make_app().run_test() as pilot:
        system = pilot.app.system
        modal = system.modal

        click(system.new_intent_button)
        fill_fields(modal, title="Greeting", answer="Hello!")
        await pilot.pause()

        click(modal.submit)
        system.on_create_submitted(Button.Pressed(modal.actions["create"]))

        assert len(system) == 0
        assert modal.mode is ModalMode.CREATE


async def test_create_twice_in_a_row(make_app):
    """Test that each create cycle adds exactly one intent."""
    async with make_app().run_test() as pilot:
        system = pilot.app.system
        modal = system.modal

        for title in ("Greeting", "Farewell"):
            click(system.new_intent_button)
            fill_fields(modal, title=title, expressions="x", answer="y")
            await pilot.pause()
            click(modal.submit)
            await pilot.pause()

        assert [intent.title for intent in system] == ["Greeting", "Farewell"]


async def test_missing_container_is_fatal(make_app):
    """Test that an unknown root selector fails setup."""
    async with make_app().run_test() as pilot:
        with pytest.raises(SetupError, match="intent container"):
            IntentSystem(pilot.app, selector="#nowhere")


async def test_missing_new_intent_button_is_fatal(make_app):
    """Test that setup fails without the new intent button."""
    async with make_app().run_test() as pilot:
        app = pilot.app
        await app.query_one("#intents").mount(Static(classes="js-anchor"))
        await app.query_one("#new-intent").remove()

        with pytest.raises(SetupError, match="new intent card button"):
            IntentSystem(app)


async def test_missing_anchor_is_fatal(make_app):
    """Test that setup fails without the insertion anchor."""
    async with make_app().run_test() as pilot:
        app = pilot.app
        app.query_one("#new-intent").remove_class("js-anchor")

        with pytest.raises(SetupError, match="anchor"):
            IntentSystem(app)


async def test_teardown_detaches_handlers(make_app):
    """Test that tearing down the system leaves its buttons inert."""
    async with make_app().run_test() as pilot:
        system = pilot.app.system

        system.teardown_events()
        click(system.new_intent_button)
        assert system.modal.mode is ModalMode.CLOSED

        system.modal.open(ModalMode.CREATE)
        click(system.modal.actions["cancel"])
        assert system.modal.mode is ModalMode.CREATE
