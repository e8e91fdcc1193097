""" run.py
Example program which connects to the fxpractice environment, selects an account,
sets up logging, and polls H4 candles for an instrument.
"""
import argparse
import logging
import time

from core import Client, ClientConfig
from models import ApiError


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Poll OANDA candles")
    parser.add_argument('--config', default=None, help="YAML config file (defaults to oanda_api.yml)")
    parser.add_argument('--token', default=None, help="OANDA personal access token")
    parser.add_argument('--account', type=int, default=None, help="OANDA account")
    parser.add_argument('--instrument', default='EUR_USD')
    parser.add_argument('--granularity', default='H4')
    parser.add_argument('--interval', type=float, default=30.0, help="Seconds between polls")
    parser.add_argument('--debug', default=None, choices=('', 'debug', 'trace'))
    return parser.parse_args(argv)


def build_client(args: argparse.Namespace) -> Client:
    if args.token:
        config = ClientConfig(token=args.token)
    else:
        config = ClientConfig.load(args.config)
    if args.account is not None:
        config.account_id = args.account
    if args.debug is not None:
        config.debug = args.debug

    client = Client.from_config(config)
    if not client.account_id:
        raise SystemExit("An Oanda account is required")
    return client


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO,
                        format='%(asctime)s|%(levelname)s|%(message)s', datefmt='%m/%d/%Y %H:%M:%S')

    client = build_client(args)
    url = f"/v1/candles?instrument={args.instrument}&granularity={args.granularity}&candleFormat=bidask"
    poller = client.new_poll_request(client.new_request('GET', url))

    try:
        logging.info("Starting...")
        while True:
            rsp = poller.poll()
            if poller.not_modified(rsp):
                logging.info("Candles unchanged")
            else:
                try:
                    candles = client.decode_response(rsp)
                except ApiError as e:
                    logging.error(e)
                else:
                    print(candles)
            time.sleep(args.interval)
    except KeyboardInterrupt:
        logging.info("Shutting Down")
        print("Shutting Down...")
    finally:
        client.close_idle_connections()


if __name__ == '__main__':
    main()
