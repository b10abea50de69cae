"""
SecurePathResolver 测试
"""

import pytest

from filehub.filestore import SecurePathResolver, UnsafeFilenameError


@pytest.fixture
def resolver(tmp_path):
    return SecurePathResolver(tmp_path)


class TestSecurePathResolver:
    """安全路径解析测试"""

    def test_resolves_under_root(self, resolver, tmp_path):
        assert resolver.resolve("a.txt") == tmp_path / "a.txt"

    @pytest.mark.parametrize(
        "filename, reason",
        [
            ("", "empty filename"),
            ("a/b", "path separators are not allowed"),
            ("a\\b", "path separators are not allowed"),
            (".", "relative path components are not allowed"),
            ("..", "relative path components are not allowed"),
            ("a\nb", "control characters are not allowed"),
        ],
    )
    def test_rejection_reasons(self, resolver, filename, reason):
        with pytest.raises(UnsafeFilenameError) as exc_info:
            resolver.resolve(filename)

        assert exc_info.value.reason == reason
        assert exc_info.value.filename == filename

    def test_symlink_out_of_root_rejected(self, tmp_path):
        root = tmp_path / "root"
        root.mkdir()
        (root / "link").symlink_to(tmp_path)

        resolver = SecurePathResolver(root)

        with pytest.raises(UnsafeFilenameError) as exc_info:
            resolver.resolve("link")

        assert exc_info.value.reason == "path outside storage root"
