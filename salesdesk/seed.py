"""Sample users and sales loaded when the server starts."""

from __future__ import annotations

from typing import List, Tuple

from salesdesk.sales import Sale, SaleService
from salesdesk.users import User, UserService

_SEED_USERS = (
    ("John Doe", "123 Main St", "johndoe"),
    ("Jane Smith", "456 Oak Ave", "janesmith"),
    ("Bob Johnson", "789 Pine Rd", "bobjohnson"),
)

# (index of the seeded user, amount)
_SEED_SALES = (
    (0, 100.50),
    (0, 200.75),
    (1, 150.25),
    (1, 300.00),
    (2, 75.99),
    (2, 125.45),
)


def init_system(
    sale_service: SaleService, user_service: UserService
) -> Tuple[List[User], List[Sale]]:
    """Create the sample users and their sales, printing a summary."""
    users = [
        user_service.create(User(name=name, address=address, nickname=nickname))
        for name, address, nickname in _SEED_USERS
    ]

    print("\nSales created:")
    print("-------------")
    for user in users:
        print(
            f"User: {user.name}, Address: {user.address}, "
            f"Nickname: {user.nickname}, UserID: {user.id}"
        )

    sales = []
    for index, amount in _SEED_SALES:
        owner = users[index]
        sale = sale_service.create(owner.id, amount)
        print(
            f"Sale ID: {sale.id}, User: {owner.name}, "
            f"Amount: {sale.amount:.2f}, Status: {sale.status.value}"
        )
        sales.append(sale)

    print("-------------")
    return users, sales