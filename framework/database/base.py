from abc import ABC, abstractmethod

class BaseDatabaseDriver(ABC):
    """Connection lifecycle shared by storage drivers."""

    @abstractmethod
    async def connect(self):
        pass

    @abstractmethod
    async def disconnect(self):
        pass
