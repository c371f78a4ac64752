"""API tests for rankings endpoints."""

import pytest
from decimal import Decimal
from unittest import mock
from uuid import uuid4
from django.db import OperationalError, DatabaseError
from django.urls import reverse
from rest_framework import status

from apps.rankings.models import DrinkRanking
from apps.rankings.services import insert_ranking


def rank_all(user, drinks, tier='good'):
    for position, drink in enumerate(drinks, start=1):
        insert_ranking(user=user, drink_id=drink.id, tier=tier, rank=position)


# ============================================================================
# LIST / INSERT
# ============================================================================

@pytest.mark.django_db
class TestRankingListEndpoint:
    """Tests for GET/POST /api/rankings/."""

    def test_requires_authentication(self, api_client):
        response = api_client.get(reverse('rankings:ranking-list'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_list_empty(self, ranking_auth_client):
        response = ranking_auth_client.get(reverse('rankings:ranking-list'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == []

    def test_list_joined_with_drink_and_cafe(self, ranking_auth_client, ranking_user, drinks, ranking_cafe):
        rank_all(ranking_user, drinks[:2])

        response = ranking_auth_client.get(reverse('rankings:ranking-list'))

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 2
        first = response.data[0]
        assert first['drink_id'] == str(drinks[0].id)
        assert first['tier_rank'] == 1
        assert first['score'] == '10.0'
        assert first['quality_tier'] == 'good'
        assert first['drink_type'] == drinks[0].drink_type
        assert first['cafe_name'] == ranking_cafe.name
        assert first['cafe_city'] == 'Brno'
        assert first['cafe_photo'] == 'photo-ref-1'
        assert 'ranking_id' in first
        assert 'ranked_at' in first

    def test_list_only_own_rankings(self, ranking_auth_client, ranking_other_user, make_drink):
        theirs = make_drink(user=ranking_other_user)
        insert_ranking(user=ranking_other_user, drink_id=theirs.id, tier='good', rank=1)

        response = ranking_auth_client.get(reverse('rankings:ranking-list'))

        assert response.data == []

    def test_insert(self, ranking_auth_client, ranking_user, drinks):
        rank_all(ranking_user, drinks[:3])

        response = ranking_auth_client.post(reverse('rankings:ranking-list'), {
            'drink_id': str(drinks[3].id),
            'tier': 'good',
            'rank': 1,
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['tier_rank'] == 1
        assert response.data['score'] == '10.0'
        assert DrinkRanking.objects.get(drink=drinks[0]).tier_rank == 2

    def test_insert_invalid_tier(self, ranking_auth_client, drinks):
        response = ranking_auth_client.post(reverse('rankings:ranking-list'), {
            'drink_id': str(drinks[0].id),
            'tier': 'excellent',
            'rank': 1,
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'validation_error'
        assert 'tier' in response.data['details']

    def test_insert_rank_zero(self, ranking_auth_client, drinks):
        response = ranking_auth_client.post(reverse('rankings:ranking-list'), {
            'drink_id': str(drinks[0].id),
            'tier': 'good',
            'rank': 0,
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'validation_error'

    def test_insert_rank_out_of_range(self, ranking_auth_client, drinks):
        response = ranking_auth_client.post(reverse('rankings:ranking-list'), {
            'drink_id': str(drinks[0].id),
            'tier': 'good',
            'rank': 3,
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'validation_error'
        assert 'error' in response.data

    def test_insert_unknown_drink(self, ranking_auth_client):
        response = ranking_auth_client.post(reverse('rankings:ranking-list'), {
            'drink_id': str(uuid4()),
            'tier': 'good',
            'rank': 1,
        }, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['code'] == 'not_found'

    def test_insert_already_ranked(self, ranking_auth_client, ranking_user, drinks):
        rank_all(ranking_user, drinks[:1])

        response = ranking_auth_client.post(reverse('rankings:ranking-list'), {
            'drink_id': str(drinks[0].id),
            'tier': 'mid',
            'rank': 1,
        }, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['code'] == 'duplicate_ranking'

    def test_insert_with_stale_snapshot(self, ranking_auth_client, ranking_user, drinks):
        rank_all(ranking_user, drinks[:2])

        response = ranking_auth_client.post(reverse('rankings:ranking-list'), {
            'drink_id': str(drinks[2].id),
            'tier': 'good',
            'rank': 1,
            'snapshot_version': 1,
        }, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['code'] == 'concurrency_conflict'

    def test_insert_lock_contention(self, ranking_auth_client, drinks):
        with mock.patch(
            'apps.rankings.services.ranking_management._shift_ranks',
            side_effect=OperationalError('database is locked'),
        ):
            response = ranking_auth_client.post(reverse('rankings:ranking-list'), {
                'drink_id': str(drinks[0].id),
                'tier': 'good',
                'rank': 1,
            }, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['code'] == 'concurrency_conflict'
        assert not DrinkRanking.objects.exists()

    def test_insert_storage_failure(self, ranking_auth_client, drinks):
        with mock.patch(
            'apps.rankings.services.ranking_management._shift_ranks',
            side_effect=DatabaseError('disk full'),
        ):
            response = ranking_auth_client.post(reverse('rankings:ranking-list'), {
                'drink_id': str(drinks[0].id),
                'tier': 'good',
                'rank': 1,
            }, format='json')

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data['code'] == 'storage_error'


# ============================================================================
# QUERIES
# ============================================================================

@pytest.mark.django_db
class TestRankingQueryEndpoints:
    """Tests for tier, unranked, counts and check endpoints."""

    def test_tier_in_rank_order(self, ranking_auth_client, ranking_user, drinks):
        rank_all(ranking_user, drinks[:3], tier='mid')

        response = ranking_auth_client.get(reverse('rankings:tier-rankings', args=['mid']))

        assert response.status_code == status.HTTP_200_OK
        assert [r['tier_rank'] for r in response.data] == [1, 2, 3]
        assert [r['score'] for r in response.data] == ['5.9', '4.5', '3.0']

    def test_invalid_tier(self, ranking_auth_client):
        response = ranking_auth_client.get(reverse('rankings:tier-rankings', args=['legendary']))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'validation_error'

    def test_unranked(self, ranking_auth_client, ranking_user, drinks):
        rank_all(ranking_user, drinks[:4])

        response = ranking_auth_client.get(reverse('rankings:unranked-drinks'))

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 1
        assert response.data[0]['drink_id'] == str(drinks[4].id)
        assert response.data[0]['quality_tier'] == 'good'
        assert response.data[0]['cafe_name'] == 'Blue Door Coffee'

    def test_counts(self, ranking_auth_client, ranking_user, drinks):
        rank_all(ranking_user, drinks[:2], tier='bad')

        response = ranking_auth_client.get(reverse('rankings:tier-counts'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'good': 0, 'mid': 0, 'bad': 2}

    def test_check_ranked(self, ranking_auth_client, ranking_user, drinks):
        rank_all(ranking_user, drinks[:1])

        response = ranking_auth_client.get(reverse('rankings:check-ranking', args=[drinks[0].id]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['is_ranked'] is True
        assert response.data['rank'] == 1
        assert response.data['tier'] == 'good'
        assert Decimal(response.data['score']) == Decimal('10.0')

    def test_check_unranked(self, ranking_auth_client, drinks):
        response = ranking_auth_client.get(reverse('rankings:check-ranking', args=[drinks[0].id]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'is_ranked': False, 'rank': None, 'tier': None, 'score': None}


# ============================================================================
# REORDER / DELETE
# ============================================================================

@pytest.mark.django_db
class TestRankingMutationEndpoints:
    """Tests for reorder and delete endpoints."""

    def test_reorder(self, ranking_auth_client, ranking_user, drinks):
        rank_all(ranking_user, drinks[:3])

        response = ranking_auth_client.put(reverse('rankings:reorder-rankings'), {
            'tier': 'good',
            'rankings': [
                {'drink_id': str(drinks[2].id), 'rank': 1},
                {'drink_id': str(drinks[0].id), 'rank': 3},
            ],
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert [r['drink_id'] for r in response.data] == [
            str(drinks[2].id), str(drinks[1].id), str(drinks[0].id),
        ]
        assert [r['score'] for r in response.data] == ['10.0', '8.0', '6.0']

    def test_reorder_unranked_drink(self, ranking_auth_client, ranking_user, drinks):
        rank_all(ranking_user, drinks[:2])

        response = ranking_auth_client.put(reverse('rankings:reorder-rankings'), {
            'tier': 'good',
            'rankings': [{'drink_id': str(drinks[4].id), 'rank': 1}],
        }, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['code'] == 'not_found'

    def test_reorder_empty_list(self, ranking_auth_client):
        response = ranking_auth_client.put(reverse('rankings:reorder-rankings'), {
            'tier': 'good',
            'rankings': [],
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'validation_error'

    def test_reorder_rank_out_of_range(self, ranking_auth_client, ranking_user, drinks):
        rank_all(ranking_user, drinks[:2])

        response = ranking_auth_client.put(reverse('rankings:reorder-rankings'), {
            'tier': 'good',
            'rankings': [{'drink_id': str(drinks[0].id), 'rank': 5}],
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'validation_error'

    def test_delete(self, ranking_auth_client, ranking_user, drinks):
        rank_all(ranking_user, drinks[:3])

        response = ranking_auth_client.delete(reverse('rankings:ranking-detail', args=[drinks[0].id]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'success': True}
        assert list(
            DrinkRanking.objects.order_by('tier_rank').values_list('tier_rank', 'score')
        ) == [(1, Decimal('10.0')), (2, Decimal('6.0'))]

    def test_delete_not_ranked(self, ranking_auth_client, drinks):
        response = ranking_auth_client.delete(reverse('rankings:ranking-detail', args=[drinks[0].id]))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['code'] == 'not_found'

    def test_delete_other_users_ranking(self, ranking_other_client, ranking_user, drinks):
        rank_all(ranking_user, drinks[:1])

        response = ranking_other_client.delete(reverse('rankings:ranking-detail', args=[drinks[0].id]))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert DrinkRanking.objects.filter(drink=drinks[0]).exists()


# ============================================================================
# PLACEMENT
# ============================================================================

@pytest.mark.django_db
class TestPlacementEndpoint:
    """Tests for POST /api/rankings/placement/."""

    def test_first_step(self, ranking_auth_client, ranking_user, drinks):
        rank_all(ranking_user, drinks[:3])

        response = ranking_auth_client.post(reverse('rankings:placement'), {
            'drink_id': str(drinks[3].id),
            'tier': 'good',
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total'] == 3
        assert response.data['snapshot_version'] == 3
        assert response.data['comparisons_made'] == 0
        assert response.data['estimated_comparisons'] == 2
        assert response.data['is_complete'] is False
        assert response.data['final_rank'] is None
        assert response.data['comparison']['drink_id'] == str(drinks[1].id)

    def test_complete_after_answers(self, ranking_auth_client, ranking_user, drinks):
        rank_all(ranking_user, drinks[:3])

        response = ranking_auth_client.post(reverse('rankings:placement'), {
            'drink_id': str(drinks[3].id),
            'tier': 'good',
            'choices': [True, True],
            'snapshot_version': 3,
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['is_complete'] is True
        assert response.data['final_rank'] == 1
        assert response.data['comparison'] is None
        assert not DrinkRanking.objects.filter(drink=drinks[3]).exists()

    def test_confirm(self, ranking_auth_client, ranking_user, drinks):
        rank_all(ranking_user, drinks[:3])

        response = ranking_auth_client.post(reverse('rankings:placement'), {
            'drink_id': str(drinks[3].id),
            'tier': 'good',
            'choices': [False, False],
            'snapshot_version': 3,
            'confirm': True,
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['tier_rank'] == 4
        assert response.data['score'] == '6.0'

    def test_confirm_incomplete(self, ranking_auth_client, ranking_user, drinks):
        rank_all(ranking_user, drinks[:3])

        response = ranking_auth_client.post(reverse('rankings:placement'), {
            'drink_id': str(drinks[3].id),
            'tier': 'good',
            'choices': [False],
            'snapshot_version': 3,
            'confirm': True,
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'validation_error'

    def test_stale_snapshot(self, ranking_auth_client, ranking_user, drinks):
        rank_all(ranking_user, drinks[:3])

        response = ranking_auth_client.post(reverse('rankings:placement'), {
            'drink_id': str(drinks[3].id),
            'tier': 'good',
            'choices': [True],
            'snapshot_version': 1,
        }, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['code'] == 'concurrency_conflict'

    def test_tier_changed_mid_session(self, ranking_auth_client, ranking_user, drinks):
        rank_all(ranking_user, drinks[:3])
        url = reverse('rankings:placement')
        first = ranking_auth_client.post(url, {
            'drink_id': str(drinks[3].id),
            'tier': 'good',
            'choices': [False],
            'snapshot_version': 3,
        }, format='json')
        assert first.data['snapshot_version'] == 3

        insert_ranking(user=ranking_user, drink_id=drinks[4].id, tier='good', rank=1)

        without_version = ranking_auth_client.post(url, {
            'drink_id': str(drinks[3].id),
            'tier': 'good',
            'choices': [False, True],
            'confirm': True,
        }, format='json')
        with_old_version = ranking_auth_client.post(url, {
            'drink_id': str(drinks[3].id),
            'tier': 'good',
            'choices': [False, True],
            'snapshot_version': 3,
            'confirm': True,
        }, format='json')

        assert without_version.status_code == status.HTTP_400_BAD_REQUEST
        assert without_version.data['code'] == 'validation_error'
        assert 'snapshot_version' in without_version.data['details']
        assert with_old_version.status_code == status.HTTP_409_CONFLICT
        assert with_old_version.data['code'] == 'concurrency_conflict'
        assert not DrinkRanking.objects.filter(drink=drinks[3]).exists()
        assert DrinkRanking.objects.filter(user=ranking_user, quality_tier='good').count() == 4

    def test_first_step_needs_no_version(self, ranking_auth_client, ranking_user, drinks):
        rank_all(ranking_user, drinks[:2])

        response = ranking_auth_client.post(reverse('rankings:placement'), {
            'drink_id': str(drinks[3].id),
            'tier': 'good',
            'choices': [],
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['snapshot_version'] == 2

    def test_already_ranked(self, ranking_auth_client, ranking_user, drinks):
        rank_all(ranking_user, drinks[:1])

        response = ranking_auth_client.post(reverse('rankings:placement'), {
            'drink_id': str(drinks[0].id),
        }, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['code'] == 'duplicate_ranking'
