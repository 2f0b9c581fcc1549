import pytest

from wowza_token import InvalidIP, TokenSpec, verify_signed_url

SECRET = "MyStreamKey123"
URL = "http://wowza.example.com:1935/vod/mp4:sample.mp4/playlist.m3u8"


def signed(client_ip=None, algorithm="SHA256", params=None):
    spec = TokenSpec("wowzatoken", SECRET)
    spec.set_url(URL)
    spec.set_hash_algorithm(algorithm)
    if client_ip:
        spec.set_client_ip(client_ip)
    spec.set_extra_params(params if params is not None else {"starttime": "1700000000", "endtime": "1700003600"})
    return spec.build_signed_url()


def test_valid_signed_url():
    assert verify_signed_url(signed(), "wowzatoken", SECRET) == (True, None)


def test_valid_signed_url_without_params():
    assert verify_signed_url(signed(params={}), "wowzatoken", SECRET) == (True, None)


def test_encoded_params_are_decoded_before_hashing():
    url = signed(params={"CustomParameter": "a b/c&d"})
    assert verify_signed_url(url, "wowzatoken", SECRET) == (True, None)


def test_client_ip_binding():
    url = signed(client_ip="192.168.1.2")
    assert verify_signed_url(url, "wowzatoken", SECRET, client_ip="192.168.1.2") == (True, None)
    assert verify_signed_url(url, "wowzatoken", SECRET, client_ip="192.168.1.3") == (False, "Invalid token")
    assert verify_signed_url(url, "wowzatoken", SECRET) == (False, "Invalid token")


def test_algorithm_must_match():
    url = signed(algorithm="SHA512")
    assert verify_signed_url(url, "wowzatoken", SECRET, hash_algorithm="SHA512") == (True, None)
    assert verify_signed_url(url, "wowzatoken", SECRET) == (False, "Invalid token")


def test_wrong_secret():
    assert verify_signed_url(signed(), "wowzatoken", "OtherKey") == (False, "Invalid token")


def test_tampered_param():
    url = signed().replace("wowzatokenendtime=1700003600", "wowzatokenendtime=1800000000")
    assert verify_signed_url(url, "wowzatoken", SECRET) == (False, "Invalid token")


def test_tampered_path():
    url = signed().replace("mp4:sample.mp4", "mp4:other.mp4")
    assert verify_signed_url(url, "wowzatoken", SECRET) == (False, "Invalid token")


def test_other_manifest_still_valid():
    url = signed().replace("playlist.m3u8", "chunklist_w42.m3u8")
    assert verify_signed_url(url, "wowzatoken", SECRET) == (True, None)


def test_unprefixed_params_are_ignored():
    url = signed() + "&DVR"
    assert verify_signed_url(url, "wowzatoken", SECRET) == (True, None)


def test_tampered_token():
    url = signed()
    url = url[:-2] + ("A=" if not url.endswith("A=") else "B=")
    assert verify_signed_url(url, "wowzatoken", SECRET) == (False, "Invalid token")


def test_non_ascii_token():
    url = signed(params={}).split("&wowzatokenhash=")[0] + "&wowzatokenhash=%C3%A9"
    assert verify_signed_url(url, "wowzatoken", SECRET) == (False, "Invalid token")


def test_missing_token():
    url = signed().split("&wowzatokenhash=")[0]
    assert verify_signed_url(url, "wowzatoken", SECRET) == (False, "Missing token")


def test_malformed_client_ip_raises():
    with pytest.raises(InvalidIP):
        verify_signed_url(signed(), "wowzatoken", SECRET, client_ip="localhost")


def test_base_url_with_query_round_trips():
    spec = TokenSpec("wowzatoken", SECRET)
    spec.set_url(URL + "?DVR&foo=bar")
    spec.set_extra_params({"endtime": "5"})
    signed_url = spec.build_signed_url()
    assert "?DVR&foo=bar?wowzatokenendtime=5&" in signed_url
    assert verify_signed_url(signed_url, "wowzatoken", SECRET) == (True, None)


def test_path_with_space_round_trips():
    spec = TokenSpec("wowzatoken", SECRET)
    spec.set_url("http://wowza.example.com/vod/my stream/playlist.m3u8")
    assert verify_signed_url(spec.build_signed_url(), "wowzatoken", SECRET) == (True, None)
