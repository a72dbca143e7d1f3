from __future__ import annotations

import random
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from modules.customers.models import Customer
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.orders.constants import OrderStatus
from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.restaurants.models import Restaurant


class Command(BaseCommand):
    help = "Seed database with realistic development data."

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        users_created = self._seed_users()
        customers = self._seed_customers()
        products = self._seed_products()
        orders_created = self._seed_orders(customers, products)

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"users={users_created}, "
                f"customers={len(customers)}, "
                f"products={len(products)}, "
                f"orders={orders_created}"
            )
        )

    def _seed_users(self) -> int:
        User = get_user_model()
        created = 0
        if not User.objects.filter(username="admin").exists():
            User.objects.create_superuser("admin", password="admin123")
            created += 1
        if not User.objects.filter(username="user").exists():
            User.objects.create_user("user", password="user123")
            created += 1
        return created

    def _seed_customers(self) -> list[Customer]:
        self.stdout.write("Creating customers...")
        customers: list[Customer] = []
        seed_customers = [
            ("Ana Souza", "ana@example.com", "11987650001"),
            ("Bruno Lima", "bruno@example.com", "11987650002"),
            ("Carla Mendes", "carla@example.com", "21987650003"),
            ("Daniel Costa", "daniel@example.com", "31987650004"),
            ("Fernanda Rocha", "fernanda@example.com", "41987650005"),
            ("Julia Oliveira", "julia@example.com", "51987650006"),
        ]
        for name, email, phone in seed_customers:
            customer, _ = Customer.objects.get_or_create(
                email=email,
                defaults={"name": name, "phone": phone, "is_active": True},
            )
            customers.append(customer)
        self.stdout.write(self.style.SUCCESS("Creating customers... Done!"))
        return customers

    def _seed_products(self) -> list[Product]:
        self.stdout.write("Creating restaurants and products...")
        products: list[Product] = []
        menus = {
            "Cantina da Nonna": [
                ("Lasanha à Bolonhesa", "Massas", Decimal("42.90")),
                ("Espaguete ao Pesto", "Massas", Decimal("36.50")),
                ("Tiramisù", "Sobremesas", Decimal("18.00")),
            ],
            "Sushi Kaiten": [
                ("Combo 20 peças", "Japonesa", Decimal("79.90")),
                ("Temaki Salmão", "Japonesa", Decimal("29.90")),
                ("Missoshiru", "Sopas", Decimal("12.50")),
            ],
            "Hamburgueria Central": [
                ("X-Burger", "Lanches", Decimal("27.00")),
                ("X-Bacon", "Lanches", Decimal("31.00")),
                ("Batata Frita", "Acompanhamentos", Decimal("14.90")),
                ("Refrigerante Lata", "Bebidas", Decimal("6.50")),
            ],
        }
        for restaurant_name, menu in menus.items():
            restaurant, _ = Restaurant.objects.get_or_create(name=restaurant_name)
            for name, category, price in menu:
                product, _ = Product.objects.get_or_create(
                    restaurant=restaurant,
                    name=name,
                    defaults={
                        "category": category,
                        "description": f"{name} - {restaurant_name}",
                        "price": price,
                        "available": True,
                    },
                )
                products.append(product)
        self.stdout.write(self.style.SUCCESS("Creating restaurants and products... Done!"))
        return products

    def _seed_orders(self, customers: list[Customer], products: list[Product]) -> int:
        self.stdout.write("Creating orders...")
        if Order.objects.exists():
            self.stdout.write(self.style.WARNING("Skipping orders (already seeded)."))
            return 0
        if not customers or not products:
            self.stdout.write(self.style.WARNING("Skipping orders (no customers/products)."))
            return 0

        service = OrderService(
            order_repository=OrderDjangoRepository(),
            product_repository=ProductDjangoRepository(),
            customer_repository=CustomerDjangoRepository(),
        )
        forward_path = [
            OrderStatus.EM_PREPARO,
            OrderStatus.SAIU_PARA_ENTREGA,
            OrderStatus.ENTREGUE,
        ]

        orders_created = 0
        for _ in range(20):
            customer = random.choice(customers)
            sample = random.sample(products, k=random.randint(1, 4))
            order = service.create_order(
                CreateOrderDTO(
                    customer_id=customer.id,
                    items=[
                        CreateOrderItemDTO(
                            product_id=product.id,
                            quantity=random.randint(1, 3),
                        )
                        for product in sample
                    ],
                )
            )
            orders_created += 1

            if random.random() < 0.15:
                service.cancel_order(order.id, "Seed cancellation")
                continue
            for new_status in forward_path[: random.randint(0, len(forward_path))]:
                service.update_status(order.id, new_status)

        self.stdout.write(self.style.SUCCESS("Creating orders... Done!"))
        return orders_created
