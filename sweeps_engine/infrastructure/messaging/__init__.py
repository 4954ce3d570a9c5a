from .rabbitmq_result_publisher import RabbitMQResultPublisher

__all__ = ['RabbitMQResultPublisher']
