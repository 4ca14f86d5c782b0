import unittest

from tubescan.errors import InvalidReference, InvalidReferenceKind, UnsupportedFormat
from tubescan.parsing import ReferenceKind, is_short, parse_duration, parse_youtube_reference


class ParseDurationTests(unittest.TestCase):
    def test_full_and_partial_components(self):
        self.assertEqual(parse_duration("PT1H2M3S"), 3723)
        self.assertEqual(parse_duration("PT2M30S"), 150)
        self.assertEqual(parse_duration("PT45S"), 45)
        self.assertEqual(parse_duration("PT1H"), 3600)
        self.assertEqual(parse_duration("PT10M"), 600)

    def test_unparseable_duration_is_zero(self):
        self.assertEqual(parse_duration("garbage"), 0)
        self.assertEqual(parse_duration("P1D"), 0)
        self.assertEqual(parse_duration(""), 0)
        self.assertEqual(parse_duration(None), 0)

    def test_is_short_boundary(self):
        self.assertTrue(is_short(0))
        self.assertTrue(is_short(60))
        self.assertFalse(is_short(61))


class ParseReferenceTests(unittest.TestCase):
    def test_channel_id(self):
        reference = parse_youtube_reference("https://www.youtube.com/channel/UCabc123")
        self.assertEqual(reference.kind, ReferenceKind.CHANNEL_ID)
        self.assertEqual(reference.id, "UCabc123")
        self.assertFalse(reference.is_shorts_scoped)
        self.assertTrue(reference.is_channel)

    def test_handle_with_shorts_tab(self):
        reference = parse_youtube_reference("https://youtube.com/@mkbhd/shorts")
        self.assertEqual(reference.kind, ReferenceKind.HANDLE)
        self.assertEqual(reference.id, "mkbhd")
        self.assertTrue(reference.is_shorts_scoped)

    def test_legacy_custom_alias(self):
        reference = parse_youtube_reference("https://youtube.com/c/SomeCreator")
        self.assertEqual(reference.kind, ReferenceKind.LEGACY_CUSTOM_ALIAS)
        self.assertEqual(reference.id, "SomeCreator")

    def test_watch_and_short_link(self):
        watch = parse_youtube_reference("https://m.youtube.com/watch?v=abc123&t=10")
        self.assertEqual((watch.kind, watch.id), (ReferenceKind.VIDEO, "abc123"))
        self.assertFalse(watch.is_channel)

        short_link = parse_youtube_reference("https://youtu.be/xyz789")
        self.assertEqual((short_link.kind, short_link.id), (ReferenceKind.VIDEO, "xyz789"))

    def test_shorts_video(self):
        reference = parse_youtube_reference("https://youtube.com/shorts/SHORT01")
        self.assertEqual(reference.kind, ReferenceKind.SHORTS)
        self.assertEqual(reference.id, "SHORT01")
        self.assertFalse(reference.is_shorts_scoped)

    def test_shorts_flag_only_for_channel_kinds(self):
        reference = parse_youtube_reference("https://youtube.com/channel/UC1/shorts")
        self.assertTrue(reference.is_shorts_scoped)
        self.assertEqual(reference.to_dict(), {"kind": "channelId", "id": "UC1", "isShortsScoped": True})

    def test_non_youtube_host(self):
        with self.assertRaises(InvalidReferenceKind):
            parse_youtube_reference("https://example.com/@someone")
        with self.assertRaises(InvalidReferenceKind):
            parse_youtube_reference("not a url")

    def test_unsupported_youtube_path(self):
        with self.assertRaises(UnsupportedFormat):
            parse_youtube_reference("https://youtube.com/playlist?list=PL123")

    def test_reference_errors_are_value_errors(self):
        with self.assertRaises(ValueError):
            parse_youtube_reference("https://youtube.com/feed/trending")
        self.assertTrue(issubclass(UnsupportedFormat, InvalidReference))


if __name__ == "__main__":
    unittest.main()
