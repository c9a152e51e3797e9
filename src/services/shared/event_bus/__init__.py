from .domain_event_bus import DomainEventBus as DomainEventBus
