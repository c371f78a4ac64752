from django.db import models
import uuid


class QualityTier(models.TextChoices):
    GOOD = 'good', 'Good'
    MID = 'mid', 'Mid'
    BAD = 'bad', 'Bad'


class DrinkRanking(models.Model):
    """
    Position of a drink inside one of its owner's quality tiers.

    Within a (user, quality_tier) the tier_rank values are exactly 1..N and
    score never increases as tier_rank grows. Rank 1 is the best drink.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='drink_rankings')
    drink = models.OneToOneField('drinks.Drink', on_delete=models.CASCADE, related_name='ranking')
    quality_tier = models.CharField(max_length=10, choices=QualityTier.choices)
    # Signed: ranks are staged in negative space while a tier is rewritten
    tier_rank = models.IntegerField()
    score = models.DecimalField(max_digits=3, decimal_places=1)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'drink_rankings'
        constraints = [
            models.UniqueConstraint(
                fields=['user', 'quality_tier', 'tier_rank'],
                name='unique_tier_rank_per_user',
            ),
        ]
        indexes = [
            models.Index(fields=['user', '-score'], name='rankings_user_score_idx'),
        ]
        ordering = ['-score', '-created_at']

    def __str__(self):
        return f"{self.quality_tier} #{self.tier_rank} ({self.score})"


class RankingTier(models.Model):
    """
    Per-(user, tier) lock row and change counter.

    Every tier mutation locks this row first and bumps `version`, so
    concurrent mutations of one tier run one after another and a placement
    session can tell whether the tier moved since it took its snapshot.
    """

    id = models.BigAutoField(primary_key=True)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='ranking_tiers')
    tier = models.CharField(max_length=10, choices=QualityTier.choices)
    version = models.PositiveIntegerField(default=0)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'ranking_tiers'
        unique_together = [['user', 'tier']]

    def __str__(self):
        return f"{self.user_id}:{self.tier} v{self.version}"
