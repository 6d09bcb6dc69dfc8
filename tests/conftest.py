from aiohttp import web
import asyncio
import pytest


async def text(request: web.Request) -> web.Response:
    return web.Response(text='hello')


async def json_payload(request: web.Request) -> web.Response:
    return web.json_response({'a': 1, 'name': 'pyfetch'})


async def bad_json(request: web.Request) -> web.Response:
    return web.Response(text='{not json', content_type='application/json')


async def echo(request: web.Request) -> web.Response:
    body = await request.read()
    return web.json_response({
        'method': request.method,
        'headers': {key: value for key, value in request.headers.items()},
        'body': body.decode('utf-8'),
    })


async def status(request: web.Request) -> web.Response:
    code = int(request.match_info['code'])
    return web.Response(status=code, text=f'status {code}')


async def redirect(request: web.Request) -> web.Response:
    remaining = int(request.match_info['n'])
    if remaining == 0:
        return web.json_response({'done': True})
    return web.Response(status=302, text=f'redirect {remaining}', headers={'Location': f'/redirect/{remaining - 1}'})


async def see_other(request: web.Request) -> web.Response:
    return web.Response(status=303, headers={'Location': '/echo'})


async def temporary(request: web.Request) -> web.Response:
    return web.Response(status=307, headers={'Location': str(request.url.with_path('/echo'))})


async def no_location(request: web.Request) -> web.Response:
    return web.Response(status=302, text='nowhere')


async def ftp_redirect(request: web.Request) -> web.Response:
    return web.Response(status=301, headers={'Location': 'ftp://files.example/'})


async def slow(request: web.Request) -> web.Response:
    await asyncio.sleep(2)
    return web.Response(text='late')


@pytest.fixture
def app() -> web.Application:
    app = web.Application()
    app.router.add_get('/text', text)
    app.router.add_get('/json', json_payload)
    app.router.add_get('/bad-json', bad_json)
    app.router.add_route('*', '/echo', echo)
    app.router.add_route('*', '/status/{code}', status)
    app.router.add_get('/redirect/{n}', redirect)
    app.router.add_post('/see-other', see_other)
    app.router.add_post('/temporary', temporary)
    app.router.add_get('/no-location', no_location)
    app.router.add_get('/ftp-redirect', ftp_redirect)
    app.router.add_get('/slow', slow)
    return app


@pytest.fixture
async def server(aiohttp_server, app):
    return await aiohttp_server(app)
