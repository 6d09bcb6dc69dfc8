from pyfetch import request
import asyncio


async def main():
    response = await request(url='https://ifconfig.me', format='text', timeout=5000)
    print(response.status_code, response.status, response.data)

asyncio.run(main())
