"""
Tests for ui/bindings.py — the four event bindings of the todo list page.

Covers the optimistic-then-confirmed flow of each binding, the no-request
paths (Escape, hover, declined delete) and the fire-and-forget failure
behaviour (no rollback, no exception).
"""

import asyncio

from conftest import api_error
from ui.events import CHANGE, KEY_ENTER, KEYUP


def run(scenario):
    return asyncio.run(scenario())


# ── Completion toggle ─────────────────────────────────────────────────────────

class TestCompletionToggle:
    def test_label_marked_before_response(self, make_page, fake_api):
        async def scenario():
            page = make_page()
            fake_api.gate.clear()
            page.click_checkbox("42")
            label = page.item("42").label
            assert label.has_class("completed")
            assert page.in_flight == 1
            fake_api.gate.set()
            await page.drain()
        run(scenario)

    def test_unchecking_removes_class(self, make_page):
        async def scenario():
            page = make_page()
            label = page.item("7").label
            assert label.has_class("completed")
            page.click_checkbox("7")
            assert not label.has_class("completed")
            await page.drain()
        run(scenario)

    def test_posts_toggle_keyed_by_checkbox_value(self, make_page, fake_api):
        async def scenario():
            page = make_page()
            page.click_checkbox("42")
            await page.drain()
        run(scenario)
        assert fake_api.calls == [("toggle", "42", None)]

    def test_response_sets_checked_state(self, make_page, fake_api):
        async def scenario():
            page = make_page()
            fake_api.queue("toggle", {"id": {"value": 42}, "completed": True})
            page.click_checkbox("42")
            await page.drain()
            assert page.document.get_element_by_id("todo_42").checked is True
        run(scenario)

    def test_server_state_wins_over_optimistic_checkbox(self, make_page, fake_api):
        async def scenario():
            page = make_page()
            fake_api.queue("toggle", {"id": {"value": 42}, "completed": False})
            page.click_checkbox("42")
            checkbox = page.item("42").checkbox
            assert checkbox.checked is True
            await page.drain()
            assert checkbox.checked is False
            # The optimistic label class is not corrected by the response
            assert page.item("42").label.has_class("completed")
        run(scenario)

    def test_response_targets_returned_identifier(self, make_page, fake_api):
        async def scenario():
            page = make_page()
            fake_api.queue("toggle", {"id": {"value": "a1"}, "completed": True})
            page.click_checkbox("42")
            await page.drain()
            assert page.item("a1").checkbox.checked is True
        run(scenario)

    def test_failure_keeps_optimistic_class(self, make_page, fake_api, caplog):
        async def scenario():
            page = make_page()
            fake_api.queue("toggle", api_error("toggle", "42"))
            page.click_checkbox("42")
            await page.drain()
            assert page.item("42").label.has_class("completed")
            assert page.item("42").checkbox.checked is True
        run(scenario)
        assert "toggle request for todo 42 failed" in caplog.text

    def test_response_without_state_leaves_checkbox(self, make_page, fake_api):
        async def scenario():
            page = make_page()
            fake_api.queue("toggle", {"id": {"value": 42}})
            page.click_checkbox("42")
            await page.drain()
            assert page.item("42").checkbox.checked is True
        run(scenario)

    def test_two_change_handlers_registered(self, make_page):
        async def scenario():
            page = make_page()
            assert len(page.dispatcher.bindings(CHANGE)) == 2
        run(scenario)


# ── Inline edit ───────────────────────────────────────────────────────────────

class TestInlineEdit:
    def test_dblclick_makes_label_editable(self, make_page):
        async def scenario():
            page = make_page()
            page.start_edit("42")
            assert page.item("42").label.get_attr("contenteditable") == "true"
        run(scenario)

    def test_enter_commits_inner_markup(self, make_page, fake_api):
        async def scenario():
            page = make_page()
            fake_api.gate.clear()
            page.edit_label("42", "Buy <b>oat</b> milk")
            assert not page.item("42").label.has_attr("contenteditable")
            fake_api.gate.set()
            await page.drain()
        run(scenario)
        assert fake_api.calls == [("update", "42", "Buy <b>oat</b> milk")]

    def test_response_replaces_label_content(self, make_page, fake_api):
        async def scenario():
            page = make_page()
            fake_api.queue("update", {"id": {"value": 42}, "todo": "Buy <i>soy</i> milk"})
            page.edit_label("42", "Buy <b>oat</b> milk")
            await page.drain()
            assert page.item("42").label.inner_html == "Buy <i>soy</i> milk"
        run(scenario)

    def test_response_without_text_leaves_label(self, make_page, fake_api):
        async def scenario():
            page = make_page()
            fake_api.queue("update", {"id": {"value": 42}})
            page.edit_label("42", "Buy bread")
            await page.drain()
            assert page.item("42").label.inner_html == "Buy bread"
        run(scenario)

    def test_escape_restores_original_without_request(self, make_page, fake_api):
        async def scenario():
            page = make_page()
            page.cancel_edit("7", "scribbles")
            label = page.item("7").label
            assert label.text == "Walk the dog"
            assert not label.has_attr("contenteditable")
            assert page.in_flight == 0
        run(scenario)
        assert fake_api.calls == []

    def test_other_keys_ignored(self, make_page, fake_api):
        async def scenario():
            page = make_page()
            page.start_edit("42")
            label = page.item("42").label
            page.dispatch(label, KEYUP, 65)
            assert label.get_attr("contenteditable") == "true"
            assert page.in_flight == 0
        run(scenario)
        assert fake_api.calls == []

    def test_repeated_enter_sends_each_time(self, make_page, fake_api):
        async def scenario():
            page = make_page()
            label = page.item("42").label
            page.dispatch(label, KEYUP, KEY_ENTER)
            page.dispatch(label, KEYUP, KEY_ENTER)
            await page.drain()
        run(scenario)
        assert len(fake_api.calls_for("update")) == 2

    def test_failure_leaves_edited_text(self, make_page, fake_api):
        async def scenario():
            page = make_page()
            fake_api.queue("update", api_error("update", "42"))
            page.edit_label("42", "Buy bread")
            await page.drain()
            assert page.item("42").label.inner_html == "Buy bread"
        run(scenario)


# ── Hover reveal ──────────────────────────────────────────────────────────────

class TestDeleteReveal:
    def test_hover_reveals_and_leave_hides(self, make_page, fake_api):
        async def scenario():
            page = make_page()
            button = page.item("42").delete_button
            assert button.has_class("invisible")
            page.hover("42")
            assert not button.has_class("invisible")
            page.unhover("42")
            assert button.has_class("invisible")
            assert page.in_flight == 0
        run(scenario)
        assert fake_api.calls == []

    def test_hover_only_affects_that_item(self, make_page):
        async def scenario():
            page = make_page()
            page.hover("42")
            assert page.item("7").delete_button.has_class("invisible")
        run(scenario)


# ── Delete ────────────────────────────────────────────────────────────────────

class TestDelete:
    def test_declined_confirmation_sends_nothing(self, make_page, fake_api):
        prompts = []

        async def scenario():
            page = make_page(confirm=lambda msg: prompts.append(msg) or False)
            page.click_delete("42")
            assert page.in_flight == 0
            assert "42" in page.registry
        run(scenario)
        assert fake_api.calls == []
        assert prompts == ["Are you sure you want to delete this todo?"]

    def test_confirmed_delete_removes_item(self, make_page, fake_api):
        async def scenario():
            page = make_page(confirm=lambda msg: True)
            page.click_delete("42")
            await page.drain()
            assert page.document.get_element_by_id("todo_42") is None
            assert "42" not in page.registry
            assert len(page.document.select("li")) == 2
        run(scenario)
        assert fake_api.calls == [("delete", "42", None)]

    def test_removes_item_named_by_response(self, make_page, fake_api):
        async def scenario():
            page = make_page(confirm=lambda msg: True)
            fake_api.queue("delete", {"id": {"value": 7}})
            page.click_delete("42")
            await page.drain()
            assert "42" in page.registry
            assert "7" not in page.registry
        run(scenario)

    def test_failure_keeps_item(self, make_page, fake_api):
        async def scenario():
            page = make_page(confirm=lambda msg: True)
            fake_api.queue("delete", api_error("delete", "42"))
            page.click_delete("42")
            await page.drain()
            assert page.document.get_element_by_id("todo_42") is not None
        run(scenario)

    def test_late_toggle_after_delete_is_ignored(self, make_page, fake_api):
        async def scenario():
            page = make_page(confirm=lambda msg: True)
            fake_api.gate.clear()
            page.click_checkbox("42")
            fake_api.gate.set()
            page.click_delete("42")
            await page.drain()
            assert "42" not in page.registry
        run(scenario)
        assert {c[0] for c in fake_api.calls} == {"toggle", "delete"}
