"""ProposalReconciler 단위 테스트.

패키지 모드와 커스텀 빌드(0시간 채우기) 병합 규칙을 검증합니다.
"""

import pytest

from app.exceptions import ReconciliationError
from app.layers.layer1_suggestion import parse_suggestion
from app.layers.layer2_reconciliation import ProposalReconciler, category_title
from app.models import Package, PackageLineItem, PackagePhase, Service, Suggestion
from app.services.catalog_store import CatalogStore


@pytest.fixture
def reconciler():
    return ProposalReconciler(precision=2)


def _all_item_ids(proposal):
    return [item.id for _, item in proposal.iter_line_items()]


class TestPackageMode:
    def test_branding_tier_one_totals(self, reconciler, branding_package):
        suggestion = Suggestion.model_validate(
            {"usePackages": True, "packages": [{"name": "Branding Tier I"}]}
        )

        proposal = reconciler.reconcile(suggestion, [], [branding_package])

        assert proposal.subtotal == 6050
        assert proposal.total == 6050
        assert proposal.line_item_count == branding_package.line_item_count == 6

    def test_single_package_keeps_phase_names(self, reconciler, branding_package):
        suggestion = Suggestion.model_validate(
            {"usePackages": True, "packages": [{"packageId": "branding-tier-i"}]}
        )

        proposal = reconciler.reconcile(suggestion, [], [branding_package])

        assert [p.name for p in proposal.phases] == ["Discovery", "Logo Design", "Brand Guidelines"]
        discovery = proposal.phases[0]
        assert discovery.line_items[0].hours == 10
        assert discovery.line_items[0].rate == 150
        assert discovery.line_items[0].cost == 1500
        assert discovery.total_cost == 2100

    def test_match_by_case_insensitive_name(self, reconciler, branding_package):
        suggestion = Suggestion.model_validate(
            {"usePackages": True, "packages": [{"name": "branding tier i"}]}
        )

        selected, unmatched = reconciler.match_packages(suggestion, [branding_package])

        assert [p.id for p in selected] == ["branding-tier-i"]
        assert unmatched == []

    def test_unmatched_packages_are_dropped(self, reconciler, branding_package):
        suggestion = Suggestion.model_validate({
            "usePackages": True,
            "packages": [{"name": "Branding Tier I"}, {"name": "Moon Landing Package"}],
        })

        selected, unmatched = reconciler.match_packages(suggestion, [branding_package])
        proposal = reconciler.reconcile(suggestion, [], [branding_package])

        assert len(selected) == 1
        assert [ref.name for ref in unmatched] == ["Moon Landing Package"]
        assert proposal.subtotal == 6050

    def test_duplicate_suggestions_selected_once(self, reconciler, branding_package):
        suggestion = Suggestion.model_validate({
            "usePackages": True,
            "packages": [{"packageId": "branding-tier-i"}, {"name": "Branding Tier I"}],
        })

        proposal = reconciler.reconcile(suggestion, [], [branding_package])

        assert proposal.line_item_count == 6
        assert proposal.subtotal == 6050

    def test_no_match_yields_empty_proposal(self, reconciler, branding_package):
        suggestion = Suggestion.model_validate(
            {"usePackages": True, "packages": [{"name": "Unknown"}]}
        )

        proposal = reconciler.reconcile(suggestion, [], [branding_package])

        assert proposal.phases == []
        assert proposal.subtotal == 0
        assert proposal.total == 0

    def test_multiple_packages_prefix_phase_names(self, reconciler, branding_package):
        audit = Package(
            id="social-media-audit",
            name="Social Media Audit",
            total_cost=725,
            phases=[
                PackagePhase(
                    name="Audit & Presentation",
                    line_items=[
                        PackageLineItem(name="Social Media Audit", hours=4, rate=125, cost=500),
                        PackageLineItem(name="Audit Presentation", hours=1, rate=125, cost=125),
                        PackageLineItem(name="Presentation Call", hours=1, rate=100, cost=100),
                    ],
                )
            ],
        )
        suggestion = Suggestion.model_validate({
            "usePackages": True,
            "packages": [{"packageId": "social-media-audit"}, {"packageId": "branding-tier-i"}],
        })

        proposal = reconciler.reconcile(suggestion, [], [branding_package, audit])

        assert proposal.phases[0].name == "Social Media Audit: Audit & Presentation"
        assert proposal.phases[1].name == "Branding Tier I: Discovery"
        assert proposal.subtotal == 6050 + 725

    def test_unit_billed_item_keeps_package_price(self, reconciler):
        seo = Package(
            id="seo-foundations-monthly",
            name="SEO Foundations Monthly",
            phases=[
                PackagePhase(
                    name="Monthly SEO Services",
                    line_items=[
                        PackageLineItem(name="SEO Foundations (High Altitude)", rate=1198, cost=1198),
                        PackageLineItem(name="Account Management", hours=3, rate=100, cost=300),
                    ],
                )
            ],
        )
        suggestion = Suggestion.model_validate(
            {"usePackages": True, "packages": [{"packageId": "seo-foundations-monthly"}]}
        )

        proposal = reconciler.reconcile(suggestion, [], [seo])

        first = proposal.phases[0].line_items[0]
        assert first.hours == 1
        assert first.cost == 1198
        assert proposal.subtotal == 1498

    def test_priced_item_without_rate_is_rejected(self, reconciler):
        package = Package(
            id="broken",
            name="Broken",
            phases=[PackagePhase(name="Setup", line_items=[PackageLineItem(name="Flat Fee", cost=500)])],
        )
        suggestion = Suggestion.model_validate({"usePackages": True, "packages": [{"packageId": "broken"}]})

        with pytest.raises(ReconciliationError):
            reconciler.reconcile(suggestion, [], [package])

    def test_optional_flag_copied(self, reconciler):
        package = Package(
            id="video",
            name="Video",
            phases=[
                PackagePhase(
                    name="Production",
                    line_items=[PackageLineItem(name="Photo Shoot", hours=8, rate=250, is_optional=True)],
                )
            ],
        )
        suggestion = Suggestion.model_validate({"usePackages": True, "packages": [{"packageId": "video"}]})

        proposal = reconciler.reconcile(suggestion, [], [package])

        item = proposal.phases[0].line_items[0]
        assert item.is_optional is True
        assert item.cost == 2000

    def test_use_packages_without_packages_falls_to_custom_build(self, reconciler, abc_services):
        suggestion = Suggestion.model_validate({"usePackages": True, "packages": []})

        proposal = reconciler.reconcile(suggestion, abc_services, [])

        assert proposal.line_item_count == 3


class TestCustomBuild:
    def test_zero_fill_for_unsuggested_services(self, reconciler, abc_services):
        suggestion = Suggestion.model_validate({
            "usePackages": False,
            "customBuild": {"roles": [{"serviceName": "B", "category": "creative", "hours": 10}]},
        })

        proposal = reconciler.reconcile(suggestion, abc_services, [])

        items = {item.name: item for _, item in proposal.iter_line_items()}
        assert len(items) == 3
        assert (items["A"].hours, items["A"].cost) == (0, 0)
        assert (items["B"].hours, items["B"].rate, items["B"].cost) == (10, 150, 1500)
        assert (items["C"].hours, items["C"].cost) == (0, 0)
        assert proposal.subtotal == 1500
        assert items["A"].reasoning == "Available for manual addition"

    def test_every_catalog_service_appears(self, reconciler):
        services = CatalogStore().get_services()
        suggestion = Suggestion.model_validate({
            "usePackages": False,
            "customBuild": {"roles": [
                {"serviceName": "Website Design", "category": "creative", "hours": 20},
                {"serviceName": "Website Development", "category": "development", "hours": 40},
            ]},
        })

        proposal = reconciler.reconcile(suggestion, services, [])

        names = {item.name for _, item in proposal.iter_line_items()}
        assert {s.service_name for s in services} <= names
        assert proposal.subtotal == 20 * 150 + 40 * 150

    def test_one_phase_per_category(self, reconciler):
        services = [
            Service(service_name="Copywriting", category="creative", default_rate=150),
            Service(service_name="SEO", category="marketing", default_rate=125),
        ]

        proposal = reconciler.reconcile(Suggestion(), services, [])

        assert [p.name for p in proposal.phases] == ["Creative Services", "Marketing Services"]

    def test_role_matched_across_categories(self, reconciler, abc_services):
        suggestion = Suggestion.model_validate({
            "customBuild": {"roles": [{"serviceName": "b", "category": "marketing", "hours": 2}]},
        })

        proposal = reconciler.reconcile(suggestion, abc_services, [])

        assert proposal.line_item_count == 3
        assert proposal.subtotal == 300

    def test_suggested_rate_overrides_default(self, reconciler, abc_services):
        suggestion = Suggestion.model_validate({
            "customBuild": {"roles": [
                {"serviceName": "A", "category": "creative", "hours": 3, "rate": 120, "cost": 99999},
            ]},
        })

        proposal = reconciler.reconcile(suggestion, abc_services, [])

        item = next(item for _, item in proposal.iter_line_items() if item.name == "A")
        assert item.rate == 120
        assert item.cost == 360

    def test_role_not_in_catalog_is_added(self, reconciler, abc_services):
        suggestion = Suggestion.model_validate({
            "customBuild": {"roles": [
                {"serviceName": "Drone Footage", "hours": 4, "cost": 1000},
            ]},
        })

        proposal = reconciler.reconcile(suggestion, abc_services, [])

        other = next(p for p in proposal.phases if p.name == "Other Services")
        assert other.line_items[0].name == "Drone Footage"
        assert other.line_items[0].rate == 250
        assert other.total_cost == 1000
        assert proposal.line_item_count == 4

    def test_unusable_llm_numbers_fall_back_to_catalog(self, reconciler, abc_services):
        suggestion = parse_suggestion(
            '{"usePackages": false, "customBuild": {"roles": ['
            '{"serviceName": "B", "category": "creative", "hours": 10, "rate": -150},'
            '{"serviceName": "C", "category": "creative", "hours": NaN},'
            '{"serviceName": "Drone Footage", "hours": 5, "cost": -100}]}}'
        )

        proposal = reconciler.reconcile(suggestion, abc_services, [])

        items = {item.name: item for _, item in proposal.iter_line_items()}
        assert (items["B"].rate, items["B"].cost) == (150, 1500)
        assert (items["C"].hours, items["C"].cost) == (0, 0)
        assert (items["Drone Footage"].rate, items["Drone Footage"].cost) == (0, 0)
        assert proposal.subtotal == 1500

    def test_degraded_suggestion_gives_zero_filled_proposal(self, reconciler, abc_services):
        proposal = reconciler.reconcile(Suggestion.degraded_from("not json"), abc_services, [])

        assert proposal.line_item_count == 3
        assert proposal.subtotal == 0


class TestIdsAndContext:
    def test_ids_unique_and_non_empty(self, reconciler):
        catalog = CatalogStore()
        proposal = reconciler.reconcile(Suggestion(), catalog.get_services(), [])

        item_ids = _all_item_ids(proposal)
        phase_ids = [p.id for p in proposal.phases]
        assert all(item_ids) and all(phase_ids)
        assert len(set(item_ids)) == len(item_ids)
        assert len(set(phase_ids)) == len(phase_ids)
        assert proposal.id.startswith("PROP-")

    def test_context_copied(self, reconciler, abc_services, sample_context):
        proposal = reconciler.reconcile(Suggestion(), abc_services, [], sample_context)

        assert proposal.client_name == "Acme Coffee"
        assert proposal.budget == 8000
        assert proposal.project_type == "Branding"
        assert proposal.discount == 0


def test_category_title():
    assert category_title("creative") == "Creative Services"
    assert category_title("other") == "Other Services"
