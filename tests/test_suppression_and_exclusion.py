import unittest

from exclusion_filter import ExclusionFilter
from suppression_index import SuppressionIndex, is_nolint_comment, strip_comment_markers
from syntax_nodes import Comment


class NolintCommentTest(unittest.TestCase):
    def assertSuppresses(self, raw, expected=True):
        self.assertEqual(is_nolint_comment(strip_comment_markers(raw)), expected, raw)

    def test_blanket_forms(self):
        self.assertSuppresses("//nolint")
        self.assertSuppresses("// nolint")
        self.assertSuppresses("// nolint (blanket)")
        self.assertSuppresses("//nolint\tbecause")
        self.assertSuppresses("/* nolint */")

    def test_scoped_forms(self):
        self.assertSuppresses("//nolint:pointless")
        self.assertSuppresses("//nolint:errcheck,pointless")
        self.assertSuppresses("//nolint:errcheck, pointless ,gosec")
        self.assertSuppresses("//nolint:errcheck", expected=False)
        self.assertSuppresses("//nolint:pointlessly", expected=False)

    def test_tool_specific_form(self):
        self.assertSuppresses("//pointless:ignore")
        self.assertSuppresses("/*pointless:ignore*/")
        self.assertSuppresses("//pointless:ignored", expected=False)
        self.assertSuppresses("//other:ignore", expected=False)

    def test_unrelated_comments(self):
        self.assertSuppresses("// nolintx", expected=False)
        self.assertSuppresses("// see nolint docs", expected=False)
        self.assertSuppresses("// GetUser returns a user", expected=False)

    def test_custom_tool_name(self):
        self.assertTrue(is_nolint_comment("nolint:other", tool_name="other"))
        self.assertTrue(is_nolint_comment("other:ignore", tool_name="other"))
        self.assertFalse(is_nolint_comment("pointless:ignore", tool_name="other"))


class SuppressionIndexTest(unittest.TestCase):
    def test_comment_line_and_next_line_are_suppressed(self):
        index = SuppressionIndex.from_comments(
            [
                Comment("//nolint:pointless", line=10),
                Comment("// just a comment", line=20),
                Comment("//pointless:ignore", line=30),
            ]
        )
        self.assertTrue(index.is_suppressed(10))
        self.assertTrue(index.is_suppressed(11))
        self.assertFalse(index.is_suppressed(12))
        self.assertFalse(index.is_suppressed(9))
        self.assertFalse(index.is_suppressed(21))
        self.assertTrue(index.is_suppressed(30))
        self.assertTrue(index.is_suppressed(31))
        self.assertEqual(len(index), 4)

    def test_empty_index(self):
        index = SuppressionIndex.from_comments([])
        self.assertFalse(index.is_suppressed(1))


class ExclusionFilterTest(unittest.TestCase):
    def test_no_patterns_excludes_nothing(self):
        self.assertFalse(ExclusionFilter().should_exclude("pkg/a.go"))

    def test_matches_base_name(self):
        flt = ExclusionFilter(["*_test.go"])
        self.assertTrue(flt.should_exclude("pkg/sub/a_test.go"))
        self.assertFalse(flt.should_exclude("pkg/sub/a.go"))

    def test_matches_full_path(self):
        flt = ExclusionFilter(["vendor/**", "gen/*.go"])
        self.assertTrue(flt.should_exclude("vendor/lib/x.go"))
        self.assertTrue(flt.should_exclude("gen/models.go"))
        self.assertFalse(flt.should_exclude("src/gen.go"))

    def test_matching_is_case_sensitive(self):
        self.assertFalse(ExclusionFilter(["*_TEST.go"]).should_exclude("a_test.go"))


if __name__ == "__main__":
    unittest.main()
