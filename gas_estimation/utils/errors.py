from abc import abstractmethod

from starlette.responses import JSONResponse

from gas_estimation.utils.logger import LogArgs


class UserMistakes:
    code = 400
    error_owner = 'user'


class ProviderMistakes:
    code = 409
    error_owner = 'provider'


class BaseGasEstimationError(Exception):
    """common error for gas estimation"""

    @property
    @abstractmethod
    def msg_to_log(self):
        ...

    @property
    @abstractmethod
    def code(self):
        ...

    @property
    @abstractmethod
    def error_owner(self):
        ...

    def __init__(self, message: str = None, **kwargs):
        super().__init__(message)
        self.message = message
        self.kwargs = kwargs

    def __str__(self):
        if self.message:
            return f'{self.msg_to_log}: {self.message}'
        return self.msg_to_log

    def __repr__(self):
        return f'{self.__class__.__name__}({self.message}, {self.kwargs})'

    def to_dict(self):
        return {
            'reason': self.message,
            'error_owner': self.error_owner,
            **self.kwargs,
        }

    def to_log_args(self):
        return (
            f'{self.msg_to_log.lower()}: %({LogArgs.ex})s. Owner: %({LogArgs.error_owner})s',
            {LogArgs.ex: self.message, LogArgs.error_owner: self.error_owner},
        )

    def to_http_exception(self) -> JSONResponse:
        return JSONResponse({
            'error': str(self),
            'reason': self.message,
            'error_owner': self.error_owner,
        }, status_code=self.code)


class ValidationError(UserMistakes, BaseGasEstimationError):
    """When caller arguments are out of their allowed bounds"""
    msg_to_log = 'Invalid estimation parameters'


class UnsupportedChainError(UserMistakes, BaseGasEstimationError):
    """When EIP-1559 fee is requested for a chain without base fee"""
    msg_to_log = 'Chain does not support EIP-1559'


class FormatError(ProviderMistakes, BaseGasEstimationError):
    """When node returns a response we cannot parse"""
    msg_to_log = 'Cannot parse response'


class ProviderError(ProviderMistakes, BaseGasEstimationError):
    """When RPC request to the node fails"""
    msg_to_log = 'RPC request failed'


responses = {
    UserMistakes.code: {
        'description': 'One of the following errors:<br><br>%s<br>%s<br>' % (
            ValidationError.msg_to_log, UnsupportedChainError.msg_to_log,
        )},
    ProviderMistakes.code: {
        'description': 'One of the following errors:<br><br>%s<br>%s' % (
            FormatError.msg_to_log, ProviderError.msg_to_log,
        )},
}
