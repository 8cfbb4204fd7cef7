import pytest

from mediaproxy.domain.policies.audio_support import is_audio_codec_supported


@pytest.mark.parametrize(
    "codec, expected",
    [
        ("pcm_s16le", True),
        ("pcm_s24le", True),
        ("pcm_anything", True),
        ("mp3", True),
        ("opus", True),
        ("flac", True),
        ("ac3", True),
        ("aac", False),
        ("eac3", False),
        ("MP3", False),   # exact match only
        ("mp3float", False),
        ("", False),
    ],
)
def test_is_audio_codec_supported(codec, expected):
    assert is_audio_codec_supported(codec) is expected


def test_custom_supported_set_keeps_pcm_rule():
    assert is_audio_codec_supported("aac", supported={"aac"}) is True
    assert is_audio_codec_supported("mp3", supported={"aac"}) is False
    assert is_audio_codec_supported("pcm_f32le", supported=set()) is True
