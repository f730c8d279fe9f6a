"""Keybinding resolution and menu state tests.

Covers first-match resolution, the wildcard scope, hint-panel listing,
and the one-shot menu rule applied by ``Dispatcher``.
"""

from __future__ import annotations

import unittest

from gitdash.input import (
    DOWN,
    ENTER,
    ESC,
    KEYBINDS,
    TAB,
    Binding,
    Dispatch,
    Dispatcher,
    EnterMenu,
    KeyEvent,
    Menu,
    Mod,
    Op,
    Target,
    TargetOp,
    applicable,
    closes_menu_only,
    format_key,
    resolve,
)


class ResolveTests(unittest.TestCase):
    def test_q_in_root_menu_quits(self) -> None:
        self.assertEqual(resolve(Menu.NONE, KeyEvent("q")), Op.QUIT)

    def test_branch_menu_then_new_branch(self) -> None:
        self.assertEqual(resolve(Menu.NONE, KeyEvent("b")), EnterMenu(Menu.BRANCH))
        self.assertEqual(resolve(Menu.BRANCH, KeyEvent("c")), Op.CHECKOUT_NEW_BRANCH)

    def test_unbound_key_resolves_to_none(self) -> None:
        self.assertIsNone(resolve(Menu.NONE, KeyEvent("z")))
        self.assertIsNone(resolve(Menu.FETCH, KeyEvent("c")))

    def test_modifiers_must_match_exactly(self) -> None:
        self.assertEqual(resolve(Menu.NONE, KeyEvent.ctrl("u")), Op.HALF_PAGE_UP)
        self.assertEqual(resolve(Menu.NONE, KeyEvent("u")), Target(TargetOp.UNSTAGE))
        self.assertIsNone(resolve(Menu.NONE, KeyEvent("u", Mod.ALT)))

    def test_shifted_letters_enter_their_menus(self) -> None:
        self.assertEqual(resolve(Menu.NONE, KeyEvent.char("P")), EnterMenu(Menu.PUSH))
        self.assertEqual(resolve(Menu.NONE, KeyEvent.char("F")), EnterMenu(Menu.PULL))
        self.assertEqual(resolve(Menu.NONE, KeyEvent.char("K")), EnterMenu(Menu.DISCARD))

    def test_wildcard_binds_quit_inside_every_menu(self) -> None:
        for menu in Menu:
            if menu == Menu.ANY:
                continue
            with self.subTest(menu=menu):
                self.assertEqual(resolve(menu, KeyEvent(ESC)), Op.QUIT)

    def test_earlier_wildcard_shadows_later_scoped_binding(self) -> None:
        bindings = (
            Binding.nomod(Menu.ANY, "q", Op.QUIT),
            Binding.nomod(Menu.NONE, "q", Op.REFRESH),
        )
        self.assertEqual(resolve(Menu.NONE, KeyEvent("q"), bindings), Op.QUIT)

    def test_first_match_wins_for_same_scope(self) -> None:
        bindings = (
            Binding.nomod(Menu.NONE, "x", Op.REFRESH),
            Binding.nomod(Menu.NONE, "x", Op.QUIT),
        )
        self.assertEqual(resolve(Menu.NONE, KeyEvent("x"), bindings), Op.REFRESH)

    def test_same_key_differs_by_menu(self) -> None:
        self.assertEqual(resolve(Menu.RESET, KeyEvent("h")), Target(TargetOp.RESET_HARD))
        self.assertEqual(resolve(Menu.NONE, KeyEvent("h")), EnterMenu(Menu.HELP))
        self.assertEqual(resolve(Menu.NONE, KeyEvent(ENTER)), Target(TargetOp.SHOW))
        self.assertEqual(resolve(Menu.NONE, KeyEvent(TAB)), Op.TOGGLE_SECTION)
        self.assertEqual(resolve(Menu.NONE, KeyEvent(DOWN)), Op.SELECT_NEXT)

    def test_table_has_no_duplicate_chords_within_a_scope(self) -> None:
        chords = [(binding.menu, binding.mods, binding.key) for binding in KEYBINDS]
        self.assertEqual(len(chords), len(set(chords)))


class ApplicableTests(unittest.TestCase):
    def test_help_lists_root_bindings(self) -> None:
        self.assertEqual(applicable(Menu.HELP), applicable(Menu.NONE))
        self.assertTrue(all(binding.menu == Menu.NONE for binding in applicable(Menu.HELP)))

    def test_scoped_listing_keeps_table_order_and_skips_wildcards(self) -> None:
        listed = applicable(Menu.REBASE)
        self.assertEqual(
            [binding.op for binding in listed],
            [
                Target(TargetOp.REBASE_INTERACTIVE),
                Op.REBASE_ABORT,
                Op.REBASE_CONTINUE,
                Target(TargetOp.REBASE_AUTOSQUASH),
            ],
        )
        self.assertEqual(applicable(Menu.ANY), tuple(b for b in KEYBINDS if b.menu == Menu.ANY))
        self.assertNotIn(Op.QUIT, [binding.op for binding in listed])


class FormatKeyTests(unittest.TestCase):
    def test_labels(self) -> None:
        self.assertEqual(format_key(Binding.ctrl(Menu.NONE, "u", Op.HALF_PAGE_UP)), "C-u")
        self.assertEqual(format_key(Binding.shift(Menu.NONE, "f", Op.PULL)), "F")
        self.assertEqual(format_key(Binding.nomod(Menu.NONE, ENTER, Op.PULL)), "ret")
        self.assertEqual(format_key(Binding.nomod(Menu.NONE, TAB, Op.PULL)), "tab")
        self.assertEqual(format_key(Binding.nomod(Menu.NONE, DOWN, Op.PULL)), "↓")
        self.assertEqual(format_key(Binding.nomod(Menu.NONE, "F5", Op.PULL)), "F5")
        self.assertEqual(format_key(Binding.nomod(Menu.NONE, "BACKSPACE", Op.PULL)), "???")


class DispatcherTests(unittest.TestCase):
    def test_menu_resets_after_leaf_operation(self) -> None:
        dispatcher = Dispatcher()
        first = dispatcher.handle(KeyEvent("b"))
        self.assertEqual(first, Dispatch(EnterMenu(Menu.BRANCH), Menu.NONE))
        self.assertEqual(dispatcher.menu, Menu.BRANCH)

        second = dispatcher.handle(KeyEvent("c"))
        self.assertEqual(second, Dispatch(Op.CHECKOUT_NEW_BRANCH, Menu.BRANCH))
        self.assertEqual(dispatcher.menu, Menu.NONE)

    def test_unbound_key_keeps_menu_open(self) -> None:
        dispatcher = Dispatcher()
        dispatcher.handle(KeyEvent("r"))
        self.assertIsNone(dispatcher.handle(KeyEvent("z")))
        self.assertEqual(dispatcher.menu, Menu.REBASE)

    def test_applicable_follows_active_menu(self) -> None:
        dispatcher = Dispatcher()
        dispatcher.handle(KeyEvent("f"))
        self.assertEqual([b.op for b in dispatcher.applicable()], [Op.FETCH_ALL])
        dispatcher.reset()
        self.assertEqual(dispatcher.menu, Menu.NONE)

    def test_quit_inside_menu_only_closes_it(self) -> None:
        dispatcher = Dispatcher()
        dispatcher.handle(KeyEvent("x"))
        dispatch = dispatcher.handle(KeyEvent("q"))
        self.assertEqual(dispatch.op, Op.QUIT)
        self.assertTrue(closes_menu_only(dispatch))
        self.assertEqual(dispatcher.menu, Menu.NONE)

        root_quit = dispatcher.handle(KeyEvent("q"))
        self.assertFalse(closes_menu_only(root_quit))

    def test_discard_cancel_closes_menu(self) -> None:
        dispatcher = Dispatcher()
        dispatcher.handle(KeyEvent.char("K"))
        dispatch = dispatcher.handle(KeyEvent("n"))
        self.assertEqual(dispatch.op, Op.CANCEL_MENU)
        self.assertTrue(closes_menu_only(dispatch))
        self.assertEqual(dispatcher.menu, Menu.NONE)


if __name__ == "__main__":
    unittest.main()
