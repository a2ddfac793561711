class RaffleError(Exception):
    """Base class for every rejected raffle operation."""


class InsufficientFee(RaffleError):
    def __init__(self, payment, entrance_fee=None):
        self.payment = payment
        self.entrance_fee = entrance_fee
        if entrance_fee is None:
            super().__init__(f"not enough entrance fee: paid {payment}")
        else:
            super().__init__(f"not enough entrance fee: paid {payment}, need {entrance_fee}")


class NotOpen(RaffleError):
    def __init__(self):
        super().__init__("raffle is not open")


class UpkeepNotNeeded(RaffleError):
    def __init__(self, balance, num_players, state):
        self.balance = balance
        self.num_players = num_players
        self.state = state
        known = [
            f"{name}={value}"
            for name, value in (("balance", balance), ("players", num_players), ("state", None if state is None else int(state)))
            if value is not None
        ]
        if known:
            super().__init__(f"upkeep not needed ({', '.join(known)})")
        else:
            super().__init__("upkeep not needed")


class UnknownRequest(RaffleError):
    def __init__(self, request_id, reason="unknown request"):
        self.request_id = request_id
        super().__init__(f"{reason}: {request_id}")


class TransferFailed(RaffleError):
    def __init__(self, winner, amount):
        self.winner = winner
        self.amount = amount
        if winner is None:
            super().__init__("transfer to winner failed")
        else:
            super().__init__(f"transfer of {amount} to {winner} failed")
