import logging

from pydantic import BaseModel

from switchyard import default_error_handler
from switchyard import HTTPException
from switchyard import Response
from switchyard import Router
from switchyard import Switchyard

logging.basicConfig(level=logging.INFO)

app = Switchyard()
api = Router()


class Item(BaseModel):
    name: str
    price: float
    quantity: int = 1


class ItemResponse(BaseModel):
    id: int
    name: str
    price: float
    quantity: int


items_db: dict[int, Item] = {}
next_id = 1


@app.middleware
def server_header(request, response, next):
    response.set_header("x-powered-by", "switchyard")
    return next(request, response)


@app.route("GET", "/")
def index(request, response, next):
    return {"message": "Welcome to Switchyard!"}


@api.route("GET", "/items")
def list_items(request, response, next):
    return [ItemResponse(id=item_id, **item.model_dump()) for item_id, item in items_db.items()]


@api.route("GET", "/items/:item_id")
def get_item(request, response, next):
    item_id = int(request.path_params["item_id"])
    if item_id not in items_db:
        raise HTTPException(404, "Item not found")
    return ItemResponse(id=item_id, **items_db[item_id].model_dump())


@api.route("POST", "/items")
def create_item(request, response, next):
    global next_id
    body = Item.model_validate(request.json())
    item_id = next_id
    next_id += 1
    items_db[item_id] = body
    return Response.json(ItemResponse(id=item_id, **body.model_dump()), 201)


@api.route("DELETE", "/items/:item_id")
def delete_item(request, response, next):
    item_id = int(request.path_params["item_id"])
    if item_id not in items_db:
        raise HTTPException(404, "Item not found")
    del items_db[item_id]
    return Response.empty()


@app.route("GET", "/health")
def health(request, response, next):
    return {"status": "healthy"}


app.mount("/api", api)
app.on_error(default_error_handler(debug=True))


@app.on_startup
def startup() -> None:
    print("Application starting up...")


if __name__ == "__main__":
    app.run(host="127.0.0.1", port=8000)
