from .dynamodb import chunked as chunked
from .dynamodb import get_table as get_table
from .dynamodb import query_all as query_all
from .dynamodb import transact_write as transact_write
