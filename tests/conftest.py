import base64

import pytest

from gemini_fakes import make_png


@pytest.fixture
def png_bytes():
    return make_png()


@pytest.fixture
def png_data_url(png_bytes):
    return f"data:image/png;base64,{base64.b64encode(png_bytes).decode()}"


@pytest.fixture
def result_png():
    return make_png(color=(10, 120, 40))


@pytest.fixture
def result_data_url(result_png):
    return f"data:image/png;base64,{base64.b64encode(result_png).decode()}"
