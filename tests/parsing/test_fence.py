import unittest

from vc_changelog.parsing.fence import FenceDetector


class TestFenceDetector(unittest.TestCase):
    def feed(self, lines):
        detector = FenceDetector()
        states = []
        for line in lines:
            detector.update(line)
            states.append(detector.in_codeblock)
        return states

    def test_backtick_fence(self) -> None:
        self.assertEqual(
            self.feed(["text", "```python", "code", "```", "text"]),
            [False, True, True, False, False],
        )

    def test_other_marker_does_not_close(self) -> None:
        self.assertEqual(
            self.feed(["~~~", "```", "~~~"]),
            [True, True, False],
        )

    def test_indented_block_opens_and_closes_on_indent(self) -> None:
        self.assertEqual(
            self.feed(["    indented", "plain", "    again"]),
            [True, True, False],
        )

    def test_tab_marker(self) -> None:
        self.assertEqual(self.feed(["\tcode", "\tmore"]), [True, False])


if __name__ == "__main__":
    unittest.main()
