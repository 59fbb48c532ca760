import logging

import errchain

USERS = {'admin': 'Administrator'}

def find_user(name):
    try:
        return USERS[name]
    except KeyError as err:
        raise errchain.wrap(err, "user %r", name).status(404).level(errchain.Level.NOTICE) from None

def handle_request(name):
    try:
        return 200, find_user(name)
    except Exception as err:
        status, _ = errchain.find_status(err)
        level, _ = errchain.find_level(err)
        logging.log(level.to_logging(), "request failed: %s", err)
        logging.debug("stack trace:%s", format(errchain.stack_trace(err), '+v'))
        return int(status), str(err)

if __name__ == '__main__':
    logging.basicConfig(level=logging.DEBUG)
    print(handle_request('admin'))
    print(handle_request('guest'))
