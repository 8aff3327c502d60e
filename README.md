# salesdesk

salesdesk is a small HTTP service that keeps users and their sales in memory.
Each sale belongs to a user. A new sale gets a random status: `Pending`,
`Aproved` or `Rejected`. A pending sale can later be approved or rejected.
The package also has an interactive console client for the user endpoints.

## Installation

```
pip install .
```

## Running the server

```
salesdesk-server [--host HOST] [--port PORT]
```

By default the server listens on `0.0.0.0`, port `1234`. At start-up it seeds
three users, gives each of them two sales, and prints them.

Before the sale service creates a sale, it asks the user endpoint whether the
user exists. It sends that request to the URL given to `SaleService`. If no
URL was given, it uses the `USER_SERVICE_URL` environment variable, and if
that is unset, `http://localhost:1234`. Only a `404` answer rejects the sale.
If the user service cannot be reached, the sale is still created.

### Endpoints

| Method | Path          | Purpose                                                 |
|--------|---------------|---------------------------------------------------------|
| POST   | `/users`      | Create a user (`name`, `address`, `nickname`), 201      |
| GET    | `/users/<id>` | Fetch a user, 404 if unknown                            |
| DELETE | `/users/<id>` | Delete a user, 204 on success, 404 if unknown           |
| POST   | `/sales`      | Create a sale (`user_id`, `amount`), 201                |
| PATCH  | `/sales/<id>` | Set the status of a pending sale (`status`)             |
| GET    | `/sales`      | List a user's sales: `?user_id=...`, optional `&status=` |
| GET    | `/ping`       | Health check, answers `{"message": "pong"}`             |

A request body that is empty, is not valid JSON, is not a JSON object, or has
fields of the wrong type gets a `400` with an `{"error": ...}` body. If
`POST /sales` names an unknown user, the answer is a `500`.

`GET /sales` returns the sales under `results`. It also returns a `metadata`
object with these fields: `quantity`, `aproved`, `rejected`, `pending` and
`total_amount`. An unknown `status` in the query gets a `404`.

`PATCH /sales/<id>` answers `{"message": "Sale updated"}` on success. It fails
with:

- **404**: the sale is unknown.
- **400**: the status is not one of the three.
- **409**: the requested status is `Pending`, or the sale is no longer pending.

## Console client

```
salesdesk-client [--base-url URL]
```

The client talks to `http://localhost:1234` unless you give `--base-url`. Its
menu offers:

1. Create a user.
2. Fetch a user.
3. Delete a user.
4. Quit.

After each request it shows the status code and the body of the response,
followed by a short message. The client also stops when its input ends.

## Using the library

```python
from salesdesk.users import LocalUserStorage, UserService, User, UpdateFields
from salesdesk.sales import SaleService, SaleStorage
from salesdesk.api import create_app

users = UserService(LocalUserStorage())
sales = SaleService(SaleStorage(), "http://localhost:1234")
app = create_app(users, sales)

user = users.create(User(name="Ana", address="1 Example Rd", nickname="ana"))
users.update(user.id, UpdateFields(nickname="ana2"))
print(user.to_dict())
```

- `salesdesk.users` has `User`, `UpdateFields`, `UserService`, the storage
  interface `UserStorage` and its in-memory form `LocalUserStorage`. It also
  defines the errors `UserNotFoundError` and `EmptyUserIdError`.
- `salesdesk.sales` has `Sale`, `SaleStatus`, `SaleStorage` and
  `SaleService`. It also defines the errors `SaleNotFoundError`,
  `EmptySaleIdError`, `SaleNotPendingError`, `InvalidTransitionError` and
  `InvalidStatusError`.
- `salesdesk.api.summarize_sales(sales)` builds the `metadata` object that
  `GET /sales` returns.
- `salesdesk.seed.init_system(sale_service, user_service)` fills the services
  with the demo data and returns the users and sales it created.
- `salesdesk.server.build_app()` returns a seeded application that is ready
  to serve.
- `salesdesk.client.UserApiClient` wraps the user endpoints.
  `salesdesk.client.interact(client, stdin, stdout)` runs the menu loop.

## What it does not do

- All data lives in memory and is lost when the server stops.
- `UserService.update` exists, but the HTTP API has no route for updating a
  user.
- The console client covers only the user endpoints, not the sale endpoints.

## Tests

```
pip install .[test]
pytest
```