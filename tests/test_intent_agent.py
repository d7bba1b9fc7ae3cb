import pytest

from chainchat.agents.intent_agent import IntentAgent
from chainchat.models.chat import BalanceIntent, TransferIntent, UnknownIntent
from chainchat.utils.preprocess import normalize_message


def test_normalize_message_only_lowercases():
    assert normalize_message("Send 10 APTOS to 0xAbC!") == "send 10 aptos to 0xabc!"


@pytest.mark.parametrize("message, amount, receiver", [
    ("send 100 aptos to 0xReceiverAddress", 100, "0xreceiveraddress"),
    ("Please SEND 0 Aptos to bob_1 now", 0, "bob_1"),
    ("send   7\taptos  to   alice", 7, "alice"),
])
def test_transfer_intent(message, amount, receiver):
    assert IntentAgent.classify_intent(message) == TransferIntent(amount=amount, receiver_address=receiver)

def test_transfer_receiver_stops_at_non_word_character():
    intent = IntentAgent.classify_intent("send 3 aptos to 0xabc-def")
    assert intent == TransferIntent(amount=3, receiver_address="0xabc")

def test_transfer_wins_over_balance():
    intent = IntentAgent.classify_intent("send 5 aptos to bob and show my aptos balance")
    assert isinstance(intent, TransferIntent)

def test_send_aptos_without_transfer_shape_falls_through_to_balance():
    intent = IntentAgent.classify_intent("please send me my aptos balance")
    assert intent == BalanceIntent(source="chain-native")

def test_send_aptos_without_transfer_shape_or_balance_is_unknown():
    assert IntentAgent.classify_intent("send some aptos to bob") == UnknownIntent()

def test_non_numeric_amount_is_unknown():
    assert IntentAgent.classify_intent("send abc aptos to 0xX") == UnknownIntent()


@pytest.mark.parametrize("message", [
    "what's my aptos balance",
    "Aptos Balance",
    "show me the aptos   balance please",
])
def test_chain_native_balance_intent(message):
    assert IntentAgent.classify_intent(message) == BalanceIntent(source="chain-native")

def test_external_balance_intent():
    intent = IntentAgent.classify_intent("balance of 0xABC")
    assert intent == BalanceIntent(source="external", account_address="0xabc")

def test_aptos_balance_checked_before_balance_of():
    intent = IntentAgent.classify_intent("aptos balance of 0xabc")
    assert intent == BalanceIntent(source="chain-native")

def test_balance_without_target_is_unknown():
    assert IntentAgent.classify_intent("what is my balance") == UnknownIntent()


@pytest.mark.parametrize("message", ["hello there", "", "transfer 5 apt to bob", "aptos"])
def test_unknown_intent(message):
    assert IntentAgent.classify_intent(message) == UnknownIntent()

def test_classification_is_repeatable():
    message = "send 50 aptos to 0xreceiver"
    assert IntentAgent.classify_intent(message) == IntentAgent.classify_intent(message)
