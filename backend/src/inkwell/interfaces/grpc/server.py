"""Build the grpc.aio server hosting ``blog.BlogService``."""
import grpc

from inkwell.config import Settings
from inkwell.interfaces.facade import BlogFacade

from .codec import SERVICE_NAME
from .service import BlogServicer

METHODS = ("Register", "Login", "CreatePost", "GetPost", "UpdatePost", "DeletePost", "ListPosts")


def build_handler(servicer: BlogServicer) -> grpc.GenericRpcHandler:
    # No request deserializer: the servicer decodes itself so bad payloads map to INVALID_ARGUMENT
    handlers = {
        name: grpc.unary_unary_rpc_method_handler(getattr(servicer, name))
        for name in METHODS
    }
    return grpc.method_handlers_generic_handler(SERVICE_NAME, handlers)


def build_server(settings: Settings, facade: BlogFacade) -> grpc.aio.Server:
    server = grpc.aio.server(
        maximum_concurrent_rpcs=settings.grpc_concurrency_limit,
        options=[
            ("grpc.max_receive_message_length", settings.grpc_max_decoding_message_size_bytes),
            ("grpc.max_send_message_length", settings.grpc_max_encoding_message_size_bytes),
        ],
    )
    servicer = BlogServicer(facade, timeout_secs=settings.grpc_request_timeout_secs)
    server.add_generic_rpc_handlers((build_handler(servicer),))
    server.add_insecure_port(settings.grpc_addr)
    return server
