import unittest

from fixme.core.classifier import LEGACY_WEIGHTS, classify, score_code


class CoreClassifierTests(unittest.TestCase):
    def test_empty_text_is_not_code(self):
        score = score_code("")
        self.assertEqual(score.score, 0)
        self.assertEqual(score.threshold, 1)
        self.assertFalse(classify(""))

    def test_javascript_function_is_code(self):
        self.assertTrue(classify("function foo() { return x; }"))

    def test_function_components(self):
        score = score_code("function foo() { return x; }")
        self.assertEqual(score.braces, 4)
        self.assertEqual(score.semicolons, 1)
        self.assertEqual(score.keyword_hits, 4)
        self.assertEqual(score.score, 10)

    def test_greeting_is_prose(self):
        self.assertFalse(classify("Hello, how are you today?"))

    def test_plain_sentence_is_prose(self):
        self.assertFalse(classify("I went to the store yesterday and bought some apples."))

    def test_python_snippet_is_code(self):
        self.assertTrue(classify("def add(a, b):\n    return a + b\n"))

    def test_code_fence_overrides_low_score(self):
        text = "Here is what she said:\n```\nthanks a lot, see you soon\n```"
        score = score_code(text)
        self.assertTrue(score.has_code_fence)
        self.assertTrue(score.is_code)
        self.assertTrue(classify(text))

    def test_length_normalization_tolerates_a_few_braces(self):
        self.assertTrue(classify("call me (now)"))
        self.assertFalse(classify("Please call me (tomorrow) when you get a chance to talk about the plan."))

    def test_semicolons_and_equals_weights(self):
        score = score_code("x = a; y = b;")
        self.assertEqual(score.semicolons, 2)
        self.assertEqual(score.equals, 2)
        self.assertEqual(score.score, 6)

    def test_keyword_exact_match_is_case_insensitive(self):
        self.assertEqual(score_code("Return").keyword_hits, 2)
        self.assertEqual(score_code("IMPORT,").keyword_hits, 2)

    def test_keyword_substring_counts_once_per_word(self):
        self.assertEqual(score_code("returned").keyword_hits, 1)

    def test_word_may_hit_several_syntax_tokens(self):
        self.assertEqual(score_code("a !== b").syntax_hits, 2)

    def test_consistent_indentation_flag(self):
        self.assertTrue(score_code("    a\n    b\n    c").consistent_indentation)
        self.assertFalse(score_code("a\n  b\n\n\n").consistent_indentation)

    def test_legacy_weights_score_higher(self):
        default = score_code("a => b")
        legacy = score_code("a => b", LEGACY_WEIGHTS)
        self.assertEqual(default.score, 3)
        self.assertEqual(legacy.score, 4)

    def test_classification_is_deterministic(self):
        text = "const total = items.reduce((a, b) => a + b, 0);"
        self.assertEqual(classify(text), classify(text))


if __name__ == "__main__":
    unittest.main()
