from customer_service.models.customer import Customer
from customer_service.models.customer_token import CustomerToken
from customer_service.models.manager import Manager
