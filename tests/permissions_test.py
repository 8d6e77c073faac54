import itertools

import pytest

from fskit.core.error import InvalidPermissionsError as Error
from fskit.core.permissions import Permissions
from fskit.core.permissions import PosixPermission
from fskit.core.permissions import octal_to_symbolic
from fskit.core.permissions import symbolic_to_octal

_DIGITS = {
    0: "---",
    1: "--x",
    2: "-w-",
    3: "-wx",
    4: "r--",
    5: "r-x",
    6: "rw-",
    7: "rwx",
}


@pytest.mark.unit
class TestConversions:
    @pytest.mark.parametrize("digit, symbolic", list(_DIGITS.items()))
    def test_each_digit(self, digit, symbolic):
        assert octal_to_symbolic(digit * 100) == symbolic + "------"
        assert octal_to_symbolic(digit * 10) == "---" + symbolic + "---"
        assert octal_to_symbolic(digit) == "------" + symbolic

    @pytest.mark.parametrize(
        "octal, symbolic",
        [
            (754, "rwxr-xr--"),
            (644, "rw-r--r--"),
            (777, "rwxrwxrwx"),
            (0, "---------"),
            (421, "r---w---x"),
        ],
    )
    def test_known_values(self, octal, symbolic):
        assert octal_to_symbolic(octal) == symbolic
        assert symbolic_to_octal(symbolic) == octal

    @pytest.mark.extensive
    def test_every_valid_value(self):
        for owner, group, others in itertools.product(range(8), repeat=3):
            octal = owner * 100 + group * 10 + others
            assert symbolic_to_octal(octal_to_symbolic(octal)) == octal

    @pytest.mark.parametrize(
        "invalid",
        [999, 778, 800, 780, 8, -1, True, 7.5, "754", None],
    )
    def test_invalid_octal(self, invalid):
        with pytest.raises(Error):
            octal_to_symbolic(invalid)

    @pytest.mark.parametrize(
        "invalid",
        [
            "asdf",
            "",
            "rwxrwxrw",
            "rwxrwxrwxr",
            "xwrxwrxwr",
            "rwxrwxrwz",
            "RWXRWXRWX",
            754,
        ],
    )
    def test_invalid_symbolic(self, invalid):
        with pytest.raises(Error):
            symbolic_to_octal(invalid)


@pytest.mark.unit
class TestPermissions:
    @pytest.mark.parametrize(
        "value",
        [
            754,
            "rwxr-xr--",
            {
                PosixPermission.OWNER_READ,
                PosixPermission.OWNER_WRITE,
                PosixPermission.OWNER_EXECUTE,
                PosixPermission.GROUP_READ,
                PosixPermission.GROUP_EXECUTE,
                PosixPermission.OTHERS_READ,
            },
            PosixPermission.OWNER_READ
            | PosixPermission.OWNER_WRITE
            | PosixPermission.OWNER_EXECUTE
            | PosixPermission.GROUP_READ
            | PosixPermission.GROUP_EXECUTE
            | PosixPermission.OTHERS_READ,
            Permissions.from_mode(0o754),
        ],
    )
    def test_parse_agrees_across_representations(self, value):
        permissions = Permissions.parse(value)
        assert permissions.mode == 0o754
        assert permissions.octal == 754
        assert permissions.symbolic == "rwxr-xr--"
        assert permissions == Permissions.from_octal(754)

    def test_flags(self):
        assert Permissions.parse(754).flags == {
            PosixPermission.OWNER_READ,
            PosixPermission.OWNER_WRITE,
            PosixPermission.OWNER_EXECUTE,
            PosixPermission.GROUP_READ,
            PosixPermission.GROUP_EXECUTE,
            PosixPermission.OTHERS_READ,
        }
        assert Permissions.parse(0).flags == frozenset()

    def test_parse_returns_existing_instance(self):
        permissions = Permissions.from_octal(600)
        assert Permissions.parse(permissions) is permissions

    def test_short_octal_is_zero_padded(self):
        assert Permissions.parse(7).symbolic == "------rwx"
        assert Permissions.parse(7).mode == 0o007

    def test_membership(self):
        permissions = Permissions.parse("rw-r-----")
        assert PosixPermission.OWNER_WRITE in permissions
        assert PosixPermission.GROUP_READ in permissions
        assert PosixPermission.OTHERS_READ not in permissions

    def test_str_and_repr(self):
        permissions = Permissions.parse(640)
        assert str(permissions) == "rw-r-----"
        assert repr(permissions) == "Permissions('rw-r-----')"

    def test_hashable(self):
        assert len({Permissions.parse(644), Permissions.parse("rw-r--r--")}) == 1

    @pytest.mark.parametrize(
        "invalid",
        [999, "rwxrwxrw", "bogus", True, 7.5, None, {}, ["rwx"], object()],
    )
    def test_parse_invalid(self, invalid):
        with pytest.raises(Error, match="Invalid permissions!"):
            Permissions.parse(invalid)

    @pytest.mark.parametrize("mode", [-1, 0o1000, 0o4755])
    def test_mode_out_of_range(self, mode):
        with pytest.raises(Error):
            Permissions(mode)

    def test_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            Permissions.parse(888)


if __name__ == "__main__":
    pytest.main([__file__])
