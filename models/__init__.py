from models.base import Base
from models.collection import Collection
from models.schema import Schema
