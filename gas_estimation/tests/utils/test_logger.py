from unittest import mock

from gas_estimation.config import Config
from gas_estimation.utils.logger import (
    CORRELATION_ID,
    ERR_TYPE,
    SESSION_ID,
    get_logger,
    get_logging_config,
    set_correlation_id,
    set_session_id,
)


def test_logger_adds_context():
    set_correlation_id('corr')
    set_session_id('sess')
    logger = get_logger('gas_estimation.test')

    with mock.patch.object(logger.logger, 'handle') as handle_mock:
        logger.warning('Estimated', extra={'err': ValueError('boom')})

    record = handle_mock.call_args.args[0]
    assert getattr(record, CORRELATION_ID) == 'corr'
    assert getattr(record, SESSION_ID) == 'sess'
    assert getattr(record, ERR_TYPE) == 'ValueError'


def test_logstash_handler_only_when_enabled():
    assert 'logstash' not in get_logging_config(Config(LOG_HANDLERS=['console']))['handlers']

    logging_config = get_logging_config(Config(LOG_HANDLERS=['console', 'logstash']))
    assert logging_config['handlers']['logstash']['host'] == Config().LOGSTASH
    assert logging_config['root']['handlers'] == ['console', 'logstash']
