import unittest

from renderguard.character_groups import (
    EMPTY,
    KANA_EXTENDED_A_14_0,
    KANA_SUPPLEMENT_6_0,
    KANA_SUPPLEMENT_AND_KANA_EXTENDED_A_10_0,
    CapabilityRequest,
    build_group_table,
    classify,
    default_group_table,
    is_renderable,
)
from renderguard.types import ConversionRequest


class ClassifyTests(unittest.TestCase):
    def test_range_boundaries(self) -> None:
        self.assertIsNone(classify(0x1AFFF))
        self.assertEqual(classify(0x1B000), KANA_SUPPLEMENT_6_0)
        self.assertEqual(classify(0x1B001), KANA_SUPPLEMENT_6_0)
        self.assertEqual(classify(0x1B002), KANA_SUPPLEMENT_AND_KANA_EXTENDED_A_10_0)
        self.assertEqual(classify(0x1B11E), KANA_SUPPLEMENT_AND_KANA_EXTENDED_A_10_0)
        self.assertEqual(classify(0x1B11F), KANA_EXTENDED_A_14_0)
        self.assertEqual(classify(0x1B122), KANA_EXTENDED_A_14_0)
        self.assertIsNone(classify(0x1B123))

    def test_ordinary_characters_are_ungrouped(self) -> None:
        for ch in "a.-京都〜～\U0001F600":
            with self.subTest(ch=ch):
                self.assertIsNone(classify(ord(ch)))

    def test_lone_surrogate_is_ungrouped(self) -> None:
        self.assertIsNone(classify(0xD800))

    def test_table_is_shared(self) -> None:
        self.assertIs(default_group_table(), default_group_table())

    def test_rejects_overlapping_ranges(self) -> None:
        with self.assertRaises(ValueError):
            build_group_table(
                [(0x10, 0x20, KANA_SUPPLEMENT_6_0), (0x20, 0x30, KANA_EXTENDED_A_14_0)]
            )

    def test_rejects_empty_group_in_table(self) -> None:
        with self.assertRaises(ValueError):
            build_group_table([(0x10, 0x20, EMPTY)])


class CapabilityRequestTests(unittest.TestCase):
    def test_baseline_blocks_grouped_characters(self) -> None:
        capabilities = CapabilityRequest()
        self.assertTrue(is_renderable("aa1", capabilities))
        self.assertFalse(is_renderable("a\U0001B001", capabilities))

    def test_empty_group_unlocks_nothing(self) -> None:
        capabilities = CapabilityRequest.from_groups([EMPTY])
        self.assertFalse(capabilities.allows(EMPTY))
        self.assertFalse(is_renderable("\U0001B001", capabilities))

    def test_groups_are_not_hierarchical(self) -> None:
        capabilities = CapabilityRequest.from_groups([KANA_EXTENDED_A_14_0])
        self.assertTrue(is_renderable("\U0001B122", capabilities))
        self.assertFalse(is_renderable("\U0001B001", capabilities))
        self.assertFalse(is_renderable("\U0001B002", capabilities))

    def test_mixed_groups_need_every_group(self) -> None:
        text = "\U0001B001\U0001B002"
        one = CapabilityRequest.from_groups([KANA_SUPPLEMENT_6_0])
        both = CapabilityRequest.from_groups(
            [KANA_SUPPLEMENT_6_0, KANA_SUPPLEMENT_AND_KANA_EXTENDED_A_10_0]
        )
        self.assertFalse(is_renderable(text, one))
        self.assertTrue(is_renderable(text, both))
        self.assertFalse(is_renderable(text + "\U0001B122", both))

    def test_from_request(self) -> None:
        request = ConversionRequest(
            additional_renderable_character_groups=(KANA_SUPPLEMENT_6_0,)
        )
        capabilities = CapabilityRequest.from_request(request)
        self.assertEqual(capabilities.enabled_groups, frozenset({KANA_SUPPLEMENT_6_0}))
        self.assertEqual(CapabilityRequest.from_request(None), CapabilityRequest())

    def test_unknown_group_rejected_from_groups(self) -> None:
        with self.assertRaises(ValueError):
            CapabilityRequest.from_groups(["EMOJI_99_0"])

    def test_unknown_group_ignored_from_request(self) -> None:
        request = ConversionRequest(
            additional_renderable_character_groups=("EMOJI_99_0", KANA_SUPPLEMENT_6_0)
        )
        capabilities = CapabilityRequest.from_request(request)
        self.assertEqual(capabilities.enabled_groups, frozenset({KANA_SUPPLEMENT_6_0}))
        self.assertFalse(capabilities.allows("EMOJI_99_0"))
