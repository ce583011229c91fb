from fastapi import Request

from unimanage.storage import Storage


# one Storage per application, built by create_app() and shared by every request
def get_storage(request: Request) -> Storage:
    return request.app.state.storage
