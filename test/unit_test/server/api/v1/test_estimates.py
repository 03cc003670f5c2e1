import base64
import io

import pytest
from httpx import AsyncClient
from PIL import Image
from pydantic_ai.messages import BinaryContent

from cdi_platform.ai import EstimateGenerator
from cdi_platform.server.deps import get_estimate_generator
from cdi_platform.server.main import app

pytestmark = pytest.mark.asyncio

BASE = "/api/v1/estimates"


def png_data_url(width: int, height: int, color=(255, 255, 255)) -> str:
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buffer.getvalue()).decode()


def open_data_url(data_url: str) -> Image.Image:
    return Image.open(io.BytesIO(base64.b64decode(data_url.split(",", 1)[1])))


async def test_generate_estimate(client: AsyncClient, model_script):
    response = await client.post(f"{BASE}/generate", json={"description": "Repaint the bedroom", "zip_code": "98101"})

    assert response.status_code == 200
    data = response.json()
    assert data["projectName"] == "Bedroom Repaint"
    assert data["lineItems"][0]["totalCost"] == 1400
    assert data["total"] == 1540
    assert len(model_script.calls) == 1


async def test_generate_estimate_requires_description(client: AsyncClient):
    response = await client.post(f"{BASE}/generate", json={"description": "", "zip_code": "98101"})
    assert response.status_code == 422


async def test_generate_estimate_unparseable_reply(client: AsyncClient, model_script):
    model_script.reply = "I'm sorry, I can't price that."

    response = await client.post(f"{BASE}/generate", json={"description": "Repaint", "zip_code": "98101"})

    assert response.status_code == 502
    assert response.json()["error_type"] == "EstimateParseError"


async def test_generate_estimate_without_model(client: AsyncClient):
    app.dependency_overrides[get_estimate_generator] = lambda: EstimateGenerator(model=None)

    response = await client.post(f"{BASE}/generate", json={"description": "Repaint", "zip_code": "98101"})

    assert response.status_code == 503
    assert response.json()["error_type"] == "AIConfigurationError"


async def test_generate_from_images(client: AsyncClient, model_script):
    body = {
        "description": "Deck repair",
        "zip_code": "80202",
        "images": [png_data_url(40, 20), png_data_url(20, 40)],
    }

    response = await client.post(f"{BASE}/generate-from-images", json=body)

    assert response.status_code == 200
    assert response.json()["projectName"] == "Bedroom Repaint"
    prompt = model_script.calls[0][0].parts[-1].content
    assert sum(isinstance(part, BinaryContent) for part in prompt) == 2


async def test_generate_from_images_rejects_bad_data_url(client: AsyncClient, model_script):
    body = {"description": "Deck repair", "zip_code": "80202", "images": ["not-a-data-url"]}

    response = await client.post(f"{BASE}/generate-from-images", json=body)

    assert response.status_code == 400
    assert response.json()["error_type"] == "ValidationError"
    assert model_script.calls == []


async def test_complete(client: AsyncClient, model_script):
    model_script.reply = "Two coats recommended."

    response = await client.post(f"{BASE}/complete", json={"prompt": "How many coats?"})

    assert response.status_code == 200
    assert response.json() == {"text": "Two coats recommended."}


async def test_price_task(client: AsyncClient):
    response = await client.get(
        f"{BASE}/pricing/task", params={"task_name": "Interior Painting", "zip_code": "98101", "quantity": 100}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["regional_multiplier"] == 1.22
    assert data["labor_cost"] == pytest.approx(183.0)
    assert data["unit"] == "square_foot"


async def test_price_task_rejects_negative_quantity(client: AsyncClient):
    response = await client.get(
        f"{BASE}/pricing/task", params={"task_name": "Interior Painting", "zip_code": "98101", "quantity": -1}
    )
    assert response.status_code == 422


async def test_regional_multiplier(client: AsyncClient):
    response = await client.get(f"{BASE}/pricing/multiplier", params={"zip_code": "10001"})
    assert response.json() == {"zip_code": "10001", "multiplier": 1.25}


async def test_task_categories(client: AsyncClient):
    response = await client.get(f"{BASE}/pricing/categories")

    categories = response.json()
    assert "Painting" in categories
    assert categories == sorted(categories)


async def test_square_and_crop_image(client: AsyncClient):
    square = await client.post(f"{BASE}/images/square", json={"image": png_data_url(200, 100), "target_dimension": 100})

    assert square.status_code == 200
    assert square.json()["width"] == 100
    assert square.json()["height"] == 100
    assert square.json()["image"].startswith("data:image/jpeg;base64,")
    assert open_data_url(square.json()["image"]).size == (100, 100)

    crop = await client.post(
        f"{BASE}/images/crop",
        json={"image": square.json()["image"], "target_dimension": 100, "original_width": 200, "original_height": 100},
    )

    assert crop.status_code == 200
    assert (crop.json()["width"], crop.json()["height"]) == (100, 50)


async def test_mark_image(client: AsyncClient):
    body = {
        "image": png_data_url(200, 200),
        "x_percent": 50,
        "y_percent": 50,
        "original_width": 400,
        "original_height": 200,
    }

    response = await client.post(f"{BASE}/images/mark", json=body)

    assert response.status_code == 200
    pixel = open_data_url(response.json()["image"]).convert("RGB").getpixel((100, 100))
    assert pixel[0] > 200 and pixel[1] < 60 and pixel[2] < 60


async def test_image_endpoint_rejects_non_image(client: AsyncClient):
    payload = "data:image/png;base64," + base64.b64encode(b"not an image").decode()

    response = await client.post(f"{BASE}/images/square", json={"image": payload})

    assert response.status_code == 400


async def test_match_task(client: AsyncClient):
    matched = await client.get(f"{BASE}/pricing/match", params={"description": "Install new hardwood in the den"})
    unmatched = await client.get(f"{BASE}/pricing/match", params={"description": "Tune the piano"})

    assert matched.json() == {
        "task_key": "hardwood_flooring",
        "task_name": "Hardwood Flooring Installation",
        "category": "Flooring",
    }
    assert unmatched.json() == {"task_key": None, "task_name": None, "category": None}
