from console_field.prefix import longest_iprefix_size, longest_prefix_size


class TestLongestPrefixSize:
    def test_equal_strings(self):
        assert longest_prefix_size("status", "status") == 6

    def test_shared_start(self):
        assert longest_prefix_size("team", "teamoverlay") == 4

    def test_differ_at_start(self):
        assert longest_prefix_size("abc", "xbc") == 0

    def test_empty(self):
        assert longest_prefix_size("", "abc") == 0
        assert longest_prefix_size("abc", "") == 0
        assert longest_prefix_size("", "") == 0

    def test_case_sensitive(self):
        assert longest_prefix_size("Foo", "foo") == 0
        assert longest_prefix_size("cg.Fov", "cg.fov") == 3

    def test_non_ascii(self):
        assert longest_prefix_size("été.a", "été.b") == 4


class TestLongestIPrefixSize:
    def test_ignores_case(self):
        assert longest_iprefix_size("Foo", "foobar") == 3

    def test_still_stops_at_difference(self):
        assert longest_iprefix_size("SetA", "setu") == 3

    def test_empty(self):
        assert longest_iprefix_size("", "Foo") == 0

    def test_non_ascii_case(self):
        assert longest_iprefix_size("ÉTÉ", "été") == 3
