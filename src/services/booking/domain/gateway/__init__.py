from .payment_gateway import PaymentGateway as PaymentGateway
