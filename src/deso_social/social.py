"""
DeSo social transactions.

SocialTransactions is the entry point for the social operations. Each
operation posts to one backend construction endpoint (or constructs
locally), checks permissions where the operation spends, then signs and
submits through the SubmissionOrchestrator.

Example:
    ```python
    from deso_social import DesoClient, SocialTransactions, Secp256k1Signer
    from deso_social.transactions import CreateFollowTxnRequest

    client = DesoClient("mainnet")
    signer = Secp256k1Signer(private_key_hex)
    social = SocialTransactions(client, signer=signer)

    result = social.update_following_status(CreateFollowTxnRequest(
        follower_public_key=signer.public_key_base58,
        followed_public_key="BC1YLh...",
    ))
    print(result.txn_hash_hex, result.fee_nanos)
    ```
"""

from __future__ import annotations
from functools import partial
import logging
from typing import Callable, Dict, Optional, Tuple

from .enums import SocialOperation, TransactionType
from .messaging import AccessGroupDirectory, ApiAccessGroupDirectory, MessageEncryptor, MessageRoutingResolver
from .permissions import AllowAllGuard, PermissionGuard
from .runtime.clock import Clock, SystemClock
from .runtime.errors import ConstructionError, DesoError, UnsupportedOperationError, ValidationError
from .transactions import (
    CreateFollowTxnRequest,
    CreateLikeRequest,
    SendDiamondsRequest,
    SendMessageRequest,
    SendNewMessageRequest,
    SubmitPostRequest,
    TransactionRequest,
    UpdateMessageRequest,
    UpdateProfileRequest,
)
from .tx.builders import TransactionPlan, build_plan
from .tx.construct import BalanceModelConstructor, ConstructedTransaction
from .tx.execute import SubmissionOrchestrator, SubmissionResult, TxRequestOptions
from .tx.fees import FeeSpecification
from .tx.transaction import Transaction

logger = logging.getLogger(__name__)


class SocialTransactions:
    """
    Social operations over one node, signer and set of collaborators.

    Args:
        client: DesoClient for construction endpoints, submission and app state
        signer: Signer for the acting identity; needed only to broadcast
        guard: Permission guard; defaults to allowing everything
        directory: Access-group directory; defaults to the node's lookup endpoint
        encryptor: Message encryptor used by `send_message`
        clock: Timestamp source for posts and new messages
        constructor: Local transaction constructor; defaults to one reading
            the block height from the client
    """

    def __init__(self, client, signer=None,
                 guard: Optional[PermissionGuard] = None,
                 directory: Optional[AccessGroupDirectory] = None,
                 encryptor: Optional[MessageEncryptor] = None,
                 clock: Optional[Clock] = None,
                 constructor: Optional[BalanceModelConstructor] = None):
        self.client = client
        self.guard = guard or AllowAllGuard()
        self.clock = clock or SystemClock()
        self.constructor = constructor or BalanceModelConstructor(block_height_source=client.get_block_height)
        self.orchestrator = SubmissionOrchestrator(client, signer)
        self.resolver = MessageRoutingResolver(directory or ApiAccessGroupDirectory(client), encryptor)

    # =========================================================================
    # Local construction
    # =========================================================================

    def construct(self, operation: SocialOperation, request: TransactionRequest) -> ConstructedTransaction:
        """
        Build the unsigned transaction for an operation without the backend.

        Only the current block height is read from the node.

        Raises:
            UnsupportedOperationError: For diamonds
            ValidationError: If the request does not fit the operation
            ConstructionError: If the block height is unavailable
        """
        plan = build_plan(operation, request, self.clock)
        return self.constructor.construct(plan, FeeSpecification.from_request(request), request.extra_data)

    def construct_update_profile_transaction(self, request: UpdateProfileRequest) -> ConstructedTransaction:
        return self.construct(SocialOperation.UPDATE_PROFILE, request)

    def construct_submit_post_transaction(self, request: SubmitPostRequest) -> ConstructedTransaction:
        return self.construct(SocialOperation.SUBMIT_POST, request)

    def construct_follow_transaction(self, request: CreateFollowTxnRequest) -> ConstructedTransaction:
        return self.construct(SocialOperation.UPDATE_FOLLOWING_STATUS, request)

    def construct_like_transaction(self, request: CreateLikeRequest) -> ConstructedTransaction:
        return self.construct(SocialOperation.UPDATE_LIKE_STATUS, request)

    def construct_diamond_transaction(self, request: SendDiamondsRequest) -> ConstructedTransaction:
        """Always raises UnsupportedOperationError; diamonds construct remotely."""
        return self.construct(SocialOperation.SEND_DIAMONDS, request)

    def construct_send_dm_transaction(self, request: SendNewMessageRequest) -> ConstructedTransaction:
        return self.construct(SocialOperation.SEND_DM_MESSAGE, request)

    def construct_update_dm_transaction(self, request: UpdateMessageRequest) -> ConstructedTransaction:
        return self.construct(SocialOperation.UPDATE_DM_MESSAGE, request)

    def construct_send_group_chat_transaction(self, request: SendNewMessageRequest) -> ConstructedTransaction:
        return self.construct(SocialOperation.SEND_GROUP_CHAT_MESSAGE, request)

    def construct_update_group_chat_transaction(self, request: UpdateMessageRequest) -> ConstructedTransaction:
        return self.construct(SocialOperation.UPDATE_GROUP_CHAT_MESSAGE, request)

    # =========================================================================
    # Profiles and posts
    # =========================================================================

    def update_profile(self, request: UpdateProfileRequest,
                       options: Optional[TxRequestOptions] = None) -> SubmissionResult:
        """
        Create or update a profile.

        The fee is computed locally first and, together with any additional
        fees, is the spend amount the permission guard authorizes.
        """
        return self._submit_spending(SocialOperation.UPDATE_PROFILE, TransactionType.UPDATE_PROFILE,
                                     request, options)

    def submit_post(self, request: SubmitPostRequest,
                    options: Optional[TxRequestOptions] = None) -> SubmissionResult:
        """Create, edit or repost a post. Guarded like `update_profile`."""
        return self._submit_spending(SocialOperation.SUBMIT_POST, TransactionType.SUBMIT_POST,
                                     request, options)

    # =========================================================================
    # Follows, likes, diamonds
    # =========================================================================

    def update_following_status(self, request: CreateFollowTxnRequest,
                                options: Optional[TxRequestOptions] = None) -> SubmissionResult:
        options = options or TxRequestOptions()
        return self._guarded(TransactionType.FOLLOW, options, partial(
            self.orchestrator.sign_and_submit,
            SocialOperation.UPDATE_FOLLOWING_STATUS.endpoint, request, options,
            construction_function=self.construct_follow_transaction,
        ))

    def send_diamonds(self, request: SendDiamondsRequest,
                      options: Optional[TxRequestOptions] = None) -> SubmissionResult:
        """
        Send diamonds to a post's author.

        Diamonds are a basic transfer on the ledger, so that is the kind the
        guard is asked about. Local construction always fails.
        """
        options = options or TxRequestOptions()
        return self._guarded(TransactionType.BASIC_TRANSFER, options, partial(
            self.orchestrator.sign_and_submit,
            SocialOperation.SEND_DIAMONDS.endpoint, request, options,
            construction_function=self.construct_diamond_transaction,
        ))

    def update_like_status(self, request: CreateLikeRequest,
                           options: Optional[TxRequestOptions] = None) -> SubmissionResult:
        return self.orchestrator.sign_and_submit(
            SocialOperation.UPDATE_LIKE_STATUS.endpoint, request, options,
            construction_function=self.construct_like_transaction,
        )

    # =========================================================================
    # Messages
    # =========================================================================

    def send_dm_message(self, request: SendNewMessageRequest,
                        options: Optional[TxRequestOptions] = None) -> SubmissionResult:
        return self.orchestrator.sign_and_submit(
            SocialOperation.SEND_DM_MESSAGE.endpoint, request, options,
            construction_function=self.construct_send_dm_transaction,
        )

    def update_dm_message(self, request: UpdateMessageRequest,
                          options: Optional[TxRequestOptions] = None) -> SubmissionResult:
        return self.orchestrator.sign_and_submit(
            SocialOperation.UPDATE_DM_MESSAGE.endpoint, request, options,
            construction_function=self.construct_update_dm_transaction,
        )

    def send_group_chat_message(self, request: SendNewMessageRequest,
                                options: Optional[TxRequestOptions] = None) -> SubmissionResult:
        return self.orchestrator.sign_and_submit(
            SocialOperation.SEND_GROUP_CHAT_MESSAGE.endpoint, request, options,
            construction_function=self.construct_send_group_chat_transaction,
        )

    def update_group_chat_message(self, request: UpdateMessageRequest,
                                  options: Optional[TxRequestOptions] = None) -> SubmissionResult:
        return self.orchestrator.sign_and_submit(
            SocialOperation.UPDATE_GROUP_CHAT_MESSAGE.endpoint, request, options,
            construction_function=self.construct_update_group_chat_transaction,
        )

    def send_message(self, request: SendMessageRequest,
                     options: Optional[TxRequestOptions] = None) -> SubmissionResult:
        """
        Send a plaintext message, resolving access groups and encrypting.

        Without an access group the message goes to the recipient's default
        group as a direct message; any other group name makes it a group-chat
        message.

        Raises:
            ValidationError: If the sender has no default messaging group
            EncryptionError: If encryption produces no ciphertext
        """
        options = options or TxRequestOptions()
        operation, routed = self.resolver.resolve(request, options.send_message_unencrypted)
        return self._message_senders()[operation](routed, options)

    def _message_senders(self) -> Dict[SocialOperation, Callable[..., SubmissionResult]]:
        return {
            SocialOperation.SEND_DM_MESSAGE: self.send_dm_message,
            SocialOperation.SEND_GROUP_CHAT_MESSAGE: self.send_group_chat_message,
        }

    # =========================================================================
    # Internals
    # =========================================================================

    def _guarded(self, txn_type: TransactionType, options: TxRequestOptions,
                 run: Callable[[], SubmissionResult],
                 total_spend_nanos: Optional[int] = None) -> SubmissionResult:
        """Check the guard, run the pipeline, and release the allowance if it fails."""
        if not options.check_permissions:
            return run()
        self.guard.check(txn_type, limit_override=options.tx_limit_count,
                         total_spend_nanos=total_spend_nanos)
        try:
            return run()
        except Exception:
            self.guard.release(txn_type, total_spend_nanos=total_spend_nanos)
            raise

    def _price(self, operation: SocialOperation, request: TransactionRequest,
               fee_spec: FeeSpecification) -> Tuple[TransactionPlan, Transaction]:
        try:
            plan = build_plan(operation, request, self.clock)
            return plan, self.constructor.transaction_with_fee(plan, fee_spec, request.extra_data)
        except (ConstructionError, UnsupportedOperationError, ValidationError):
            raise
        except DesoError as e:
            raise ConstructionError(f"Local construction failed: {e.message}", cause=e)

    def _submit_spending(self, operation: SocialOperation, txn_type: TransactionType,
                         request: TransactionRequest,
                         options: Optional[TxRequestOptions]) -> SubmissionResult:
        options = options or TxRequestOptions()
        if not options.check_permissions:
            return self.orchestrator.sign_and_submit(
                operation.endpoint, request, options,
                construction_function=partial(self.construct, operation),
            )

        fee_spec = FeeSpecification.from_request(request)
        plan, priced = self._price(operation, request, fee_spec)
        total_spend = priced.fee_nanos + fee_spec.additional_fees_nanos
        logger.debug(f"{operation.name} spends {total_spend} nanos")

        def construct_priced(req: TransactionRequest) -> ConstructedTransaction:
            return self.constructor.construct(plan, fee_spec, req.extra_data, priced=priced)

        return self._guarded(
            txn_type, options,
            partial(self.orchestrator.sign_and_submit, operation.endpoint, request, options,
                    construction_function=construct_priced),
            total_spend_nanos=total_spend,
        )


__all__ = ["SocialTransactions"]
