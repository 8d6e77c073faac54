import pytest

from fskit.core.error import ConfigValidationError as Error
from fskit.core.options import CopyOptions
from fskit.core.options import LinkOptions
from fskit.core.options import MoveOptions


@pytest.mark.unit
class TestOptions:
    @pytest.mark.parametrize(
        "options, expected",
        [
            (LinkOptions(), {"follow_links": True}),
            (
                CopyOptions(),
                {
                    "replace_existing": False,
                    "copy_attributes": False,
                    "follow_links": True,
                },
            ),
            (MoveOptions(), {"replace_existing": False, "atomic_move": False}),
        ],
    )
    def test_defaults(self, options, expected):
        for key, value in expected.items():
            assert getattr(options, key) is value

    def test_keyword_arguments(self):
        options = CopyOptions(replace_existing=True, follow_links=False)
        assert options.replace_existing is True
        assert options.copy_attributes is False
        assert options.follow_links is False

    @pytest.mark.parametrize("invalid", ["yes", None, "true", 1, 0])
    def test_invalid_values(self, invalid):
        with pytest.raises(Error, match="property validation failed"):
            MoveOptions(atomic_move=invalid)
        options = MoveOptions()
        with pytest.raises(Error):
            options.replace_existing = invalid

    def test_integers_are_not_booleans(self):
        with pytest.raises(Error):
            CopyOptions(replace_existing=1)
        options = CopyOptions()
        with pytest.raises(Error):
            options.follow_links = 0
        assert options.follow_links is True

    @pytest.mark.parametrize("flag", [True, False])
    def test_link_options_of_flag(self, flag):
        assert LinkOptions.of(flag) == LinkOptions(follow_links=flag)

    def test_link_options_of_options(self):
        options = LinkOptions(follow_links=False)
        assert LinkOptions.of(options) is options

    def test_link_options_of_invalid(self):
        with pytest.raises(Error):
            LinkOptions.of("no")

    def test_unknown_option(self):
        with pytest.raises(TypeError):
            CopyOptions(atomic_move=True)

    def test_instances_are_independent(self):
        first = CopyOptions()
        second = CopyOptions()
        first.replace_existing = True
        assert second.replace_existing is False
        assert CopyOptions().replace_existing is False

    def test_equality(self):
        assert MoveOptions(atomic_move=True) == MoveOptions(atomic_move=True)
        assert MoveOptions() != MoveOptions(replace_existing=True)
        assert LinkOptions() != CopyOptions()

    def test_repr(self):
        assert repr(LinkOptions(follow_links=False)) == (
            "LinkOptions(follow_links=False)"
        )
        assert repr(MoveOptions()) == (
            "MoveOptions(replace_existing=False, atomic_move=False)"
        )


if __name__ == "__main__":
    pytest.main([__file__])
