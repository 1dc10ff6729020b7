import unittest

from game import (
    HeldStick,
    MoveAction,
    MoveController,
    MoveRecord,
    Outcome,
    count_lit,
    parse_equation,
    resolve_cell,
    resolve_operator,
)


def all_single_moves(text):
    """Yields (controller, result) for every pick-up/place pair on a fresh copy of `text`."""
    base = parse_equation(text)
    positions = [(c.id, i) for c in base for i in range(c.segment_count)]
    for src in positions:
        for dst in positions:
            if src == dst:
                continue
            ctrl = MoveController(parse_equation(text))
            src_cell = ctrl.equation.cell(src[0])
            dst_cell = ctrl.equation.cell(dst[0])
            if not src_cell.segments[src[1]] or dst_cell.segments[dst[1]]:
                continue
            ctrl.touch(*src)
            yield ctrl, ctrl.touch(*dst)


class TestMoveController(unittest.TestCase):
    def test_given_idle_when_touching_lit_stick_then_picked_up_and_count_drops_by_one(self):
        ctrl = MoveController(parse_equation('9+9=15'))
        before = count_lit(ctrl.equation)
        res = ctrl.touch(2, 1)
        self.assertEqual(res.action, MoveAction.PICKED_UP)
        self.assertEqual(ctrl.held, HeldStick(2, 1))
        self.assertTrue(ctrl.holding)
        self.assertFalse(ctrl.equation.cell(2).segments[1])
        self.assertEqual(count_lit(ctrl.equation), before - 1)

    def test_given_idle_when_touching_empty_position_then_ignored(self):
        ctrl = MoveController(parse_equation('9+9=15'))
        snap = ctrl.equation.snapshot()
        res = ctrl.touch(2, 4)  # bottom-left of 9 is empty
        self.assertEqual(res.action, MoveAction.IGNORED)
        self.assertIsNone(ctrl.held)
        self.assertEqual(ctrl.equation.snapshot(), snap)

    def test_given_holding_when_touching_source_then_put_back_bit_for_bit(self):
        ctrl = MoveController(parse_equation('9+9=15'))
        snap = ctrl.equation.snapshot()
        ctrl.touch(0, 6)
        res = ctrl.touch(0, 6)
        self.assertEqual(res.action, MoveAction.CANCELLED)
        self.assertIsNone(ctrl.held)
        self.assertEqual(ctrl.equation.snapshot(), snap)

    def test_given_holding_when_touching_lit_stick_then_noop_and_still_holding(self):
        ctrl = MoveController(parse_equation('9+9=15'))
        ctrl.touch(2, 1)
        snap = ctrl.equation.snapshot()
        res = ctrl.touch(0, 0)
        self.assertEqual(res.action, MoveAction.IGNORED)
        self.assertEqual(ctrl.held, HeldStick(2, 1))
        self.assertEqual(ctrl.equation.snapshot(), snap)

    def test_given_default_puzzle_when_moving_stick_inside_nine_then_true_and_won(self):
        ctrl = MoveController(parse_equation('9+9=15'))
        ctrl.touch(2, 1)
        res = ctrl.touch(2, 4)
        self.assertEqual(res.action, MoveAction.PLACED)
        self.assertEqual(res.outcome, Outcome.VALID_TRUE)
        self.assertEqual(res.move, MoveRecord(2, 1, 2, 4))
        self.assertTrue(ctrl.won)
        self.assertEqual(resolve_cell(ctrl.equation.cell(2)), '6')

    def test_given_won_when_touching_then_every_touch_ignored(self):
        ctrl = MoveController(parse_equation('9+9=15'))
        ctrl.touch(2, 1)
        ctrl.touch(2, 4)
        snap = ctrl.equation.snapshot()
        self.assertEqual(ctrl.touch(0, 0).action, MoveAction.IGNORED)
        self.assertIsNone(ctrl.held)
        self.assertEqual(ctrl.equation.snapshot(), snap)

    def test_given_busy_when_touching_then_ignored(self):
        ctrl = MoveController(parse_equation('9+9=15'))
        ctrl.busy = True
        self.assertEqual(ctrl.touch(0, 0).action, MoveAction.IGNORED)
        self.assertTrue(ctrl.equation.cell(0).segments[0])

    def test_given_wrong_placement_when_committing_then_invalid_and_not_won(self):
        ctrl = MoveController(parse_equation('9+9=15'))
        ctrl.touch(0, 6)   # middle of first 9
        res = ctrl.touch(2, 4)
        self.assertEqual(res.action, MoveAction.PLACED)
        self.assertEqual(res.outcome, Outcome.INVALID)
        self.assertFalse(ctrl.won)
        self.assertIsNone(ctrl.held)

    def test_given_false_but_legal_result_when_committing_then_valid_false(self):
        ctrl = MoveController(parse_equation('0+1=7'))
        ctrl.touch(0, 1)
        res = ctrl.touch(4, 4)  # 7 gains bottom-left: not a digit
        self.assertEqual(res.outcome, Outcome.INVALID)
        ctrl2 = MoveController(parse_equation('6+4=4'))
        ctrl2.touch(1, 0)      # '+' vertical
        res2 = ctrl2.touch(2, 0)  # 4 gains top: not a digit
        self.assertEqual(res2.outcome, Outcome.INVALID)
        ctrl3 = MoveController(parse_equation('8-3=6'))
        ctrl3.touch(0, 1)      # 8 -> 6
        res3 = ctrl3.touch(4, 1)  # 6 -> 8
        self.assertEqual(res3.outcome, Outcome.VALID_FALSE)

    def test_given_plus_vertical_when_moved_into_digit_then_plus_reads_minus(self):
        ctrl = MoveController(parse_equation('5+7=2'))
        ctrl.touch(1, 0)
        self.assertEqual(resolve_operator('+', ctrl.equation.cell(1).segments), '-')
        res = ctrl.touch(0, 1)
        self.assertEqual(resolve_cell(ctrl.equation.cell(1)), '-')
        self.assertEqual(resolve_cell(ctrl.equation.cell(0)), '9')
        self.assertEqual(res.outcome, Outcome.VALID_TRUE)

    def test_given_unknown_cell_or_segment_when_touching_then_value_error(self):
        ctrl = MoveController(parse_equation('1+1=2'))
        with self.assertRaises(ValueError):
            ctrl.touch(99, 0)
        with self.assertRaises(ValueError):
            ctrl.touch(1, 2)

    def test_given_any_completed_move_when_counting_then_total_conserved(self):
        for text in ('9+9=15', '5+7=2', '1-1=0'):
            total = count_lit(parse_equation(text))
            n = 0
            for ctrl, res in all_single_moves(text):
                n += 1
                self.assertEqual(res.action, MoveAction.PLACED)
                self.assertIsNone(ctrl.held)
                self.assertEqual(count_lit(ctrl.equation), total)
            self.assertGreater(n, 0)


if __name__ == '__main__':
    unittest.main(verbosity=2)
