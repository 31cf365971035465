import unittest

from solver.grader import Grader


class GraderTestCase(unittest.TestCase):
    def test_basics(self):
        grader = Grader()
        grader.add(1, "one")
        grader.add(2, "two")
        grader.add(3, "three")
        self.assertEqual(3, grader.grade_num())
        self.assertEqual(3, len(grader))

        grader.add(3, "3")
        grader.add(2, "2")
        grader.add(1, "1")
        grader.add(1, "01")
        grader.add(2, "10")
        grader.add(3, "11")
        self.assertEqual(3, grader.grade_num())
        self.assertEqual(9, len(grader))
        self.assertEqual([1, 2, 3], list(grader.grades()))

        self.assertEqual(["one", "1", "01"], grader.split_off(1, 3))
        self.assertEqual(2, grader.grade_num())
        self.assertEqual(6, len(grader))
        self.assertEqual([2, 3], list(grader.grades()))

        self.assertEqual(["two", "2"], grader.split_off(2, 2))
        self.assertEqual(2, grader.grade_num())
        self.assertEqual(4, len(grader))
        self.assertEqual([2, 3], list(grader.grades()))

        self.assertEqual(["three"], grader.split_off(3, 1))
        self.assertEqual(2, grader.grade_num())
        self.assertEqual(3, len(grader))

    def test_split_off_missing_grade(self):
        grader = Grader()
        grader.add(4, "x")
        self.assertIsNone(grader.split_off(5, 10))
        self.assertEqual(1, len(grader))

    def test_first_grade_skips_emptied_grades(self):
        grader = Grader()
        self.assertIsNone(grader.first_grade())
        grader.add(7, "a")
        grader.add(2, "b")
        grader.add(5, "c")
        self.assertEqual(2, grader.first_grade())
        grader.split_off(2, 10)
        self.assertEqual(5, grader.first_grade())
        grader.add(1, "d")
        self.assertEqual(1, grader.first_grade())

    def test_retain_drops_values_and_empty_grades(self):
        grader = Grader()
        for grade, value in ((1, 10), (1, 11), (2, 20), (3, 30), (3, 31)):
            grader.add(grade, value)

        removed = grader.retain(lambda _grade, value: value % 2 == 1)
        self.assertEqual(3, removed)
        self.assertEqual([1, 3], list(grader.grades()))
        self.assertEqual(1, grader.first_grade())
        self.assertEqual([11], grader.split_off(1, 5))
        self.assertEqual(3, grader.first_grade())

    def test_refilled_grade_is_queued_once(self):
        grader = Grader()
        grader.add(3, "low")
        for i in range(50):
            grader.add(5 + i % 4, i)
            grader.split_off(3, 10)
            grader.add(3, i)
            self.assertLessEqual(len(grader._heap), grader.grade_num())
            self.assertEqual(3, grader.first_grade())
        self.assertEqual([3, 5, 6, 7, 8], list(grader.grades()))

    def test_clear(self):
        grader = Grader()
        grader.add(1, "a")
        grader.clear()
        self.assertEqual(0, len(grader))
        self.assertIsNone(grader.first_grade())


if __name__ == "__main__":
    unittest.main()
