from pyfetch import RequestOptions
from pyfetch.options import METHODS
import pytest


def test_defaults():
    options = RequestOptions('https://example.com/')
    assert options.method == 'GET'
    assert options.format == 'text'
    assert options.follow is None
    assert options.timeout is None
    assert options.body is None
    assert len(options.headers) == 0


def test_method_is_upper_cased():
    assert RequestOptions('http://example.com', method='post').method == 'POST'


def test_methods_enumeration():
    assert METHODS == {'GET', 'HEAD', 'POST', 'PUT', 'DELETE', 'CONNECT', 'OPTIONS', 'TRACE', 'PATCH'}


def test_unknown_method_rejected():
    with pytest.raises(ValueError):
        RequestOptions('http://example.com', method='FETCH')


def test_url_must_be_string():
    with pytest.raises(TypeError):
        RequestOptions(None)  # type: ignore[arg-type]


@pytest.mark.parametrize('follow, error', [(-1, ValueError), (1.5, TypeError), (True, TypeError)])
def test_invalid_follow(follow, error):
    with pytest.raises(error):
        RequestOptions('http://example.com', follow=follow)


def test_negative_timeout_rejected():
    with pytest.raises(ValueError):
        RequestOptions('http://example.com', timeout=-5)


@pytest.mark.parametrize('given, expected', [
    ('text', 'text'),
    ('string', 'text'),
    ('binary', 'binary'),
    ('buffer', 'binary'),
    ('json', 'json'),
    ('yaml', 'text'),
])
def test_format_aliases(given, expected):
    assert RequestOptions('http://example.com', format=given).format == expected


def test_headers_are_case_insensitive_and_flattened():
    options = RequestOptions('http://example.com', headers={'X-Count': 3, 'Accept': ['a/b', 'c/d']})
    assert options.headers['x-count'] == '3'
    assert options.headers.getall('accept') == ['a/b', 'c/d']


def test_replace_returns_new_record():
    options = RequestOptions('http://example.com/a', method='POST', headers={'X-A': '1'}, follow=2)
    changed = options.replace(url='http://example.com/b', method='GET')

    assert changed is not options
    assert changed.url == 'http://example.com/b'
    assert changed.method == 'GET'
    assert changed.follow == 2
    assert changed.headers['X-A'] == '1'
    assert changed.headers is not options.headers
    assert options.url == 'http://example.com/a'
    assert options.method == 'POST'
